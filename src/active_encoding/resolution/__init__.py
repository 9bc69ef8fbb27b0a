"""Resolution layer: effective encoding and minimal-override policy."""

from .resolver import (
    EncodingResolver,
    EncodingSource,
    ResolutionResult,
    choose_stored_encoding,
)

__all__ = [
    "EncodingResolver",
    "EncodingSource",
    "ResolutionResult",
    "choose_stored_encoding",
]
