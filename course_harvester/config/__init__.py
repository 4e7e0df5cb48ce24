"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import HarvestConfig

__all__ = ["ConfigLocator", "ConfigRepository", "HarvestConfig"]
