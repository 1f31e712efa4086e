"""Normalization of decoded API payloads."""

from typed_form.normalize.normalizer import (
    CoercionRecord,
    NormalizationResult,
    Normalizer,
    process_api_response,
    process_api_response_array,
)

__all__ = [
    "CoercionRecord",
    "NormalizationResult",
    "Normalizer",
    "process_api_response",
    "process_api_response_array",
]
