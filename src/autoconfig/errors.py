"""Exception hierarchy for autoconfig.

Every error aborts startup. Nothing here is recovered locally:
- ConfigurationError: bad namespace roots, unimportable modules, bad manifest
- ResolutionError: the container could not build a discovered class
- RegistrationError: the host framework rejected a registration
"""

from typing import Any, Dict, Optional, Tuple


class AutoConfigError(Exception):
    """Base class for all autoconfig errors."""


class ConfigurationError(AutoConfigError):
    """Invalid namespace roots, modules or manifest."""


class ManifestMismatchError(ConfigurationError):
    """The capability manifest no longer matches the scanned namespaces.

    Attributes:
        missing: category -> class names found by scanning but absent from the manifest
        stale: category -> class names listed in the manifest but not found by scanning
    """

    def __init__(
        self,
        missing: Dict[str, Tuple[str, ...]],
        stale: Dict[str, Tuple[str, ...]],
    ):
        self.missing = missing
        self.stale = stale
        lines = ["Capability manifest is out of date:"]
        for category, names in sorted(missing.items()):
            for name in names:
                lines.append(f"  missing {category}: {name}")
        for category, names in sorted(stale.items()):
            for name in names:
                lines.append(f"  stale {category}: {name}")
        super().__init__("\n".join(lines))


class ResolutionError(AutoConfigError):
    """The injection container could not produce an instance."""

    def __init__(self, message: str, cls: Optional[type] = None):
        super().__init__(message)
        self.cls = cls


class RegistrationError(AutoConfigError):
    """The host framework rejected a registration."""

    def __init__(
        self,
        message: str,
        category: Optional[Any] = None,
        cls: Optional[type] = None,
    ):
        super().__init__(message)
        self.category = category
        self.cls = cls


__all__ = [
    "AutoConfigError",
    "ConfigurationError",
    "ManifestMismatchError",
    "ResolutionError",
    "RegistrationError",
]
