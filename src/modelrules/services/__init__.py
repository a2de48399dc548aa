"""Service layer — rule derivation, caching, wiring and inspection."""

from modelrules.services.bootstrap import create_factory
from modelrules.services.factory import ValidationConfigurationFactory

__all__ = ["ValidationConfigurationFactory", "create_factory"]
