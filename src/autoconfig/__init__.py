"""Capability auto-configuration for service startup.

This package discovers classes under a set of namespace roots that carry a
capability marker (a marker base class or a marker decorator), resolves them
through an injection container, and registers them with the host framework
in its bootstrap and run phases.

Usage:
    from autoconfig import AutoConfig

    auto_config = AutoConfig("myservice")
    auto_config.initialize(bootstrap, container)  # bundles
    auto_config.run(environment, container)       # everything else
"""

from autoconfig.capabilities import CapabilityCategory, Phase
from autoconfig.catalog import Catalog, ClassDescriptor, build_catalog
from autoconfig.errors import (
    AutoConfigError,
    ConfigurationError,
    ManifestMismatchError,
    RegistrationError,
    ResolutionError,
)
from autoconfig.wiring import AutoConfig

__version__ = "0.1.0"

__all__ = [
    "AutoConfig",
    "Catalog",
    "ClassDescriptor",
    "build_catalog",
    "CapabilityCategory",
    "Phase",
    "AutoConfigError",
    "ConfigurationError",
    "ManifestMismatchError",
    "RegistrationError",
    "ResolutionError",
]
