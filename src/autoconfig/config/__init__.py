"""Configuration dataclasses for autoconfig.

Example usage:
    from autoconfig.config import AutoConfigSettings

    # Load from environment
    settings = AutoConfigSettings.from_env()

    # Or build directly
    settings = AutoConfigSettings(namespaces=("myservice",))
"""

from autoconfig.config.settings import AutoConfigSettings

__all__ = [
    "AutoConfigSettings",
]
