"""Callable protocol for typedform."""

from typedform.callable.execute import execute
from typedform.callable.result import CallableResult, NormalizationStats

__all__ = ["CallableResult", "NormalizationStats", "execute"]
