"""Exception types raised by the codec, bitcoin helpers and configuration.

The accessors on the build-argument models never raise; anything that can
fail lives in the collaborator-facing helpers and reports through these.
"""


class SwapTokensError(Exception):
    """Base error for all swap_tokens operations.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "swap-tokens-error"):
        super().__init__(message)
        self.message = message
        self.code = code


class DecodeError(SwapTokensError):
    """Encoded payload could not be turned back into a model."""

    def __init__(self, message: str):
        super().__init__(message, code="decode-error")


class ScriptError(SwapTokensError):
    """Bitcoin script could not be parsed."""

    def __init__(self, message: str):
        super().__init__(message, code="script-error")


class ConfigurationError(SwapTokensError):
    """Unsupported configuration value."""

    def __init__(self, message: str):
        super().__init__(message, code="configuration-error")
