from typing import Optional
from ..settings import Settings
from .development import DevelopmentSettings

ENVIRONMENTS = {
    "production": Settings,
    "development": DevelopmentSettings,
}


def load_settings(env: Optional[str] = None) -> Settings:
    """Settings class for the named environment, production when unset"""
    name = (env or "production").lower()
    if name not in ENVIRONMENTS:
        raise ValueError(f"Unknown environment: {env}")
    return ENVIRONMENTS[name]()
