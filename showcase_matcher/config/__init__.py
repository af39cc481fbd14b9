"""
Configuration layer: Settings (environment driven) and constants.

Import: from showcase_matcher.config import Settings, CONSTANTS
"""

from showcase_matcher.config.settings import Settings
from showcase_matcher.config.constants import CONSTANTS

__all__ = ["Settings", "CONSTANTS"]
