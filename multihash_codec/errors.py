"""Multihash error taxonomy."""

from typing import Optional

UNKNOWN_FUNCTION = "unknownFunction"
MALFORMED_VARINT = "malformedVarint"
MALFORMED_INPUT = "malformedInput"
LENGTH_MISMATCH = "lengthMismatch"
TRUNCATED_DIGEST = "truncatedDigest"


class MultihashError(ValueError):
    """An error raised while building or decoding a multihash."""

    error: str
    message: Optional[str] = None

    def __init__(self, error: str, message: str = None):
        """Initializer."""
        super().__init__(message or error)
        self.error = error
        self.message = message

    def serialize(self) -> dict:
        """Serialize this error to a JSON-compatible dictionary."""
        return {"error": self.error, "errorMessage": self.message}
