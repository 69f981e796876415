"""Build trigger API adapters."""

from .bitrise import BitriseTriggerAPI
from .logging_only import LoggingTriggerAPI

__all__ = ["BitriseTriggerAPI", "LoggingTriggerAPI"]
