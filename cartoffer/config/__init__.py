import os

from .settings import Settings
from .environments import load_settings
from .segment_utils import get_segment_map, reset_segment_map_cache

settings = load_settings(os.getenv("CARTOFFER_ENV"))

__all__ = ["Settings", "settings", "load_settings", "get_segment_map", "reset_segment_map_cache"]
