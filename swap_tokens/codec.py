"""JSON encoding for the swap records.

Thin wrappers around the pydantic dump/validate calls so every caller gets
the wire key names, the omit-empty rules and one error type on bad input.
"""

from typing import TypeVar

import structlog
from pydantic import ValidationError

from .errors import DecodeError
from .models import SwapModel

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=SwapModel)


def encode(model: SwapModel, indent: int | None = None) -> str:
    """Serialize a record to JSON using its wire key names."""
    return model.model_dump_json(by_alias=True, indent=indent)


def to_dict(model: SwapModel) -> dict:
    """Same mapping as encode(), as plain Python data."""
    return model.model_dump(mode="json", by_alias=True)


def decode(data: str | bytes, model_type: type[ModelT]) -> ModelT:
    """
    Parse JSON into ``model_type``.

    Raises:
        DecodeError: payload is not valid JSON or does not fit the model
    """
    try:
        return model_type.model_validate_json(data)
    except ValidationError as e:
        logger.warning(
            "Failed to decode payload",
            model=model_type.__name__,
            errors=e.error_count(),
        )
        raise DecodeError(f"invalid {model_type.__name__} payload: {e}") from e
