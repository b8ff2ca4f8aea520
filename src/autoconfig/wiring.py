"""Two-phase discovery and registration for a host framework.

AutoConfig scans its namespace roots once, at construction, and then feeds
the host framework in two phases:

- initialize(bootstrap, container): bundles only
- run(environment, container): health checks, providers, injectable
  providers, resources, tasks and managed objects, in that order

Preconditions (the host's responsibility, not checked here):
- initialize() is called exactly once, before run()
- run() is called exactly once

Usage:
    from autoconfig import AutoConfig

    auto_config = AutoConfig("myservice")

    # bootstrap phase
    auto_config.initialize(bootstrap, container)

    # run phase
    auto_config.run(environment, container)
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from autoconfig.capabilities import (
    BOOTSTRAP_ORDER,
    RUN_ORDER,
    CapabilityCategory,
    classify,
    filter_concrete,
)
from autoconfig.catalog import Catalog, build_catalog, validate_namespaces
from autoconfig.config import AutoConfigSettings
from autoconfig.dispatcher import Registration, RegistrationDispatcher
from autoconfig.manifest import load_manifest, manifest_catalog
from autoconfig.protocols import BootstrapProtocol, ContainerProtocol, EnvironmentProtocol

logger = logging.getLogger(__name__)


class AutoConfig:
    """Discovers capability classes and registers them with the host."""

    def __init__(
        self,
        *namespaces: str,
        catalog: Optional[Catalog] = None,
        strict_imports: bool = True,
        dispatcher: Optional[RegistrationDispatcher] = None,
    ):
        """Validate the namespace roots and build the catalog.

        Args:
            namespaces: Namespace roots to scan (at least one)
            catalog: Prebuilt catalog; skips scanning when given
            strict_imports: Fail on modules that cannot be imported
            dispatcher: Registration dispatcher (default: RegistrationDispatcher())

        Raises:
            ConfigurationError: If no namespace roots are given, or scanning fails
        """
        self.namespaces = validate_namespaces(namespaces)
        self.catalog = catalog if catalog is not None else build_catalog(
            self.namespaces, strict_imports=strict_imports
        )
        self._dispatcher = dispatcher or RegistrationDispatcher()

    @classmethod
    def from_manifest(cls, path: Union[str, Path], **kwargs: Any) -> "AutoConfig":
        """Create from a capability manifest instead of scanning."""
        manifest = load_manifest(path)
        return cls(*manifest.namespaces, catalog=manifest_catalog(manifest), **kwargs)

    @classmethod
    def from_settings(cls, settings: Optional[AutoConfigSettings] = None) -> "AutoConfig":
        """Create from settings (default: AutoConfigSettings.from_env())."""
        settings = settings or AutoConfigSettings.from_env()
        if settings.uses_manifest:
            return cls.from_manifest(settings.manifest_path)
        return cls(*settings.namespaces, strict_imports=settings.strict_imports)

    def initialize(self, bootstrap: BootstrapProtocol, container: ContainerProtocol) -> None:
        """Bootstrap phase: register bundles."""
        self._register(BOOTSTRAP_ORDER, bootstrap, container)

    def run(self, environment: EnvironmentProtocol, container: ContainerProtocol) -> None:
        """Run phase: register every category except bundles."""
        self._register(RUN_ORDER, environment, container)

    def _register(
        self,
        categories: Sequence[CapabilityCategory],
        host: Any,
        container: ContainerProtocol,
    ) -> List[Registration]:
        registrations = []
        for category in categories:
            matched = classify(self.catalog, category)
            concrete = filter_concrete(matched)
            for skipped in matched - concrete:
                logger.debug(f"Skipping abstract {category.value}: {skipped.qualified_name}")
            registrations.extend(
                self._dispatcher.dispatch(category, concrete, host, container)
            )
        return registrations


__all__ = ["AutoConfig"]
