"""typed-form: Field-level type coercion for API payloads and form state."""

__version__ = "0.1.0"
