"""modelrules — field-level validation rules derived from model metadata."""

__version__ = "0.1.0"
