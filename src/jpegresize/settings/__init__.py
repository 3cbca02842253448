"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
"""

from jpegresize.settings.user import CONFIG_ENV_VAR, UserSettings

__all__ = ["CONFIG_ENV_VAR", "UserSettings"]
