"""Capability manifest: the build-time table of discovered classes.

A manifest lists, per capability category, the concrete classes that take
part in registration. Loading one lets a service start without scanning its
packages; ``verify_manifest`` is the build step that fails when a class
carrying a marker has been left out of the table.

File format (YAML):

    namespaces:
    - myservice
    capabilities:
      health_check:
      - myservice.health.DatabaseHealthCheck
      task:
      - myservice.tasks.FlushCacheTask
"""

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

import yaml

from autoconfig.capabilities import (
    BOOTSTRAP_ORDER,
    RUN_ORDER,
    CapabilityCategory,
    classify,
    filter_concrete,
    get_capability,
)
from autoconfig.catalog import Catalog, ClassDescriptor, validate_namespaces
from autoconfig.errors import ConfigurationError, ManifestMismatchError

logger = logging.getLogger(__name__)

_ORDER = BOOTSTRAP_ORDER + RUN_ORDER


@dataclass(frozen=True)
class Manifest:
    """Category -> qualified class names, plus the namespaces they came from."""

    namespaces: Tuple[str, ...]
    capabilities: Mapping[CapabilityCategory, Tuple[str, ...]] = field(default_factory=dict)

    def classes_for(self, category: CapabilityCategory) -> Tuple[str, ...]:
        return tuple(self.capabilities.get(CapabilityCategory(category), ()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespaces": list(self.namespaces),
            "capabilities": {
                category.value: list(self.capabilities[category])
                for category in _ORDER
                if self.capabilities.get(category)
            },
        }


# =============================================================================
# GENERATION
# =============================================================================

def generate_manifest(catalog: Catalog) -> Manifest:
    """Build the manifest for a scanned catalog (concrete classes only)."""
    capabilities = {}
    for category in _ORDER:
        names = sorted(d.qualified_name for d in filter_concrete(classify(catalog, category)))
        if names:
            capabilities[category] = tuple(names)
    return Manifest(namespaces=catalog.namespaces, capabilities=capabilities)


def dump_manifest(manifest: Manifest) -> str:
    return yaml.safe_dump(manifest.to_dict(), sort_keys=False)


def write_manifest(manifest: Manifest, path: Union[str, Path]) -> Path:
    """Write a manifest as YAML."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(dump_manifest(manifest))
    logger.info(f"Wrote capability manifest to {target}")
    return target


# =============================================================================
# LOADING
# =============================================================================

def parse_manifest(data: Any) -> Manifest:
    """Validate a decoded YAML document and build a Manifest.

    Raises:
        ConfigurationError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Capability manifest must be a mapping")

    namespaces = validate_namespaces(data.get("namespaces") or [])

    raw = data.get("capabilities") or {}
    if not isinstance(raw, dict):
        raise ConfigurationError("'capabilities' must map categories to class lists")

    capabilities = {}
    for key, names in raw.items():
        try:
            category = CapabilityCategory(key)
        except ValueError:
            raise ConfigurationError(f"Unknown capability category in manifest: {key!r}") from None
        if not isinstance(names, list) or not all(isinstance(n, str) and n for n in names):
            raise ConfigurationError(f"Category '{key}' must list qualified class names")
        capabilities[category] = tuple(sorted(set(names)))

    return Manifest(namespaces=namespaces, capabilities=capabilities)


def load_manifest(path: Union[str, Path]) -> Manifest:
    """Read a manifest from a YAML file.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    source = Path(path)
    if not source.exists():
        raise ConfigurationError(f"Capability manifest not found: {source}")
    try:
        data = yaml.safe_load(source.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in capability manifest {source}: {e}") from e
    return parse_manifest(data)


def import_class(name: str) -> type:
    """Import a class by qualified name, including nested classes.

    Raises:
        ConfigurationError: If no module prefix imports or the attribute
            path does not lead to a class
    """
    parts = name.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name is not None and (module_name == e.name or module_name.startswith(f"{e.name}.")):
                continue
            raise ConfigurationError(f"Failed to import {module_name} for {name}: {e}") from e
        for attr in parts[split:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                raise ConfigurationError(f"Class not found: {name}")
        if not isinstance(obj, type):
            raise ConfigurationError(f"Not a class: {name}")
        return obj
    raise ConfigurationError(f"No importable module for {name}")


def manifest_catalog(manifest: Manifest) -> Catalog:
    """Build a catalog from the classes listed in a manifest (no scanning).

    Raises:
        ConfigurationError: If a class cannot be imported or does not carry
            the marker of the category it is listed under
    """
    classes: List[type] = []
    for category in _ORDER:
        capability = get_capability(category)
        for name in manifest.classes_for(category):
            klass = import_class(name)
            if not capability.matches(ClassDescriptor.of(klass)):
                raise ConfigurationError(
                    f"{name} is listed as {category.value} but does not carry its marker"
                )
            classes.append(klass)
    return Catalog.from_classes(set(classes), manifest.namespaces)


# =============================================================================
# VERIFICATION
# =============================================================================

def verify_manifest(manifest: Manifest, catalog: Catalog) -> None:
    """Check a manifest against a freshly scanned catalog.

    Raises:
        ManifestMismatchError: If a marked concrete class is missing from the
            manifest, or the manifest lists a class the scan did not find
    """
    expected = generate_manifest(catalog)
    missing: Dict[str, Tuple[str, ...]] = {}
    stale: Dict[str, Tuple[str, ...]] = {}

    for category in _ORDER:
        found = set(expected.classes_for(category))
        listed = set(manifest.classes_for(category))
        if found - listed:
            missing[category.value] = tuple(sorted(found - listed))
        if listed - found:
            stale[category.value] = tuple(sorted(listed - found))

    if missing or stale:
        raise ManifestMismatchError(missing=missing, stale=stale)
    logger.debug(f"Capability manifest matches namespaces {', '.join(catalog.namespaces)}")


__all__ = [
    "Manifest",
    "generate_manifest",
    "dump_manifest",
    "write_manifest",
    "parse_manifest",
    "load_manifest",
    "import_class",
    "manifest_catalog",
    "verify_manifest",
]
