"""Configuration management for the swap_tokens tooling."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="SWAP_TOKENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="console",
        description="Log renderer, 'console' or 'json'"
    )
    
    # Output Configuration
    json_indent: int = Field(
        default=2,
        description="Indentation used when printing encoded records"
    )
    
    # Bitcoin Configuration
    bitcoin_network: str = Field(
        default="mainnet",
        description="Chain params used for P2SH address encoding"
    )
    
    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log renderer choice."""
        v = v.lower()
        if v not in ("console", "json"):
            raise ValueError("log_format must be 'console' or 'json'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize the level name."""
        return v.upper()


# Global config instance
config = Config()
