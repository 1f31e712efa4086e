"""typedform: Typed field coercion for API payloads and forms."""

from typed_form import __version__
from typedform.callable import CallableResult, execute

__all__ = ["__version__", "CallableResult", "execute"]
