"""Capability markers.

A class joins a capability category either by subclassing one of the marker
base classes below or by carrying one of the marker decorators.

Subtype markers:
    Bundle, HealthCheck, InjectableProvider, Task, Managed

Annotation markers:
    @provider       - a host-managed provider class
    @path("/users") - a resource class served under a URL path

Usage:
    from autoconfig.markers import Managed, path

    @path("/status")
    class StatusResource:
        ...

    class Scheduler(Managed):
        def start(self) -> None: ...
        def stop(self) -> None: ...
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, TextIO

MARKERS_ATTR = "__autoconfig_markers__"

PROVIDER_ANNOTATION = "provider"
PATH_ANNOTATION = "path"


# =============================================================================
# SUBTYPE MARKERS
# =============================================================================


class Bundle(ABC):
    """A reusable group of configuration added during bootstrap."""

    @abstractmethod
    def initialize(self, bootstrap: Any) -> None: ...

    @abstractmethod
    def run(self, environment: Any) -> None: ...


class HealthCheck(ABC):
    """A health check registered under its own name.

    Subclasses must expose ``name`` as a property or class attribute; a
    subclass that leaves it abstract is skipped during discovery. Assigning
    ``self.name`` in ``__init__`` does not count: the class stays abstract
    and cannot be instantiated.

    Usage:
        class DatabaseHealthCheck(HealthCheck):
            name = "database"

            def check(self): ...
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def check(self) -> Any: ...


class InjectableProvider(ABC):
    """A provider the host's own injection machinery instantiates."""

    @abstractmethod
    def get_injectable(self, context: Any, annotation: Any, target: Any) -> Any: ...


class Task(ABC):
    """An administrative task exposed by the host."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def execute(self, parameters: Mapping[str, Any], output: TextIO) -> None: ...


class Managed(ABC):
    """An object whose start/stop lifecycle is owned by the host."""

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...


# =============================================================================
# ANNOTATION MARKERS
# =============================================================================


def _annotate(cls: type, annotation: str, value: Any) -> type:
    own = dict(vars(cls).get(MARKERS_ATTR, {}))
    own[annotation] = value
    setattr(cls, MARKERS_ATTR, own)
    return cls


def provider(cls: type) -> type:
    """Mark a class as a provider."""
    return _annotate(cls, PROVIDER_ANNOTATION, True)


def path(value: str):
    """Mark a class as a resource served under ``value``."""

    def decorator(cls: type) -> type:
        return _annotate(cls, PATH_ANNOTATION, value)

    return decorator


def annotations_of(cls: type) -> Dict[str, Any]:
    """Collect marker annotations declared on a class or any of its bases.

    Annotations closer to ``cls`` in the MRO win.
    """
    collected: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        collected.update(vars(klass).get(MARKERS_ATTR, {}))
    return collected


def annotation_value(cls: type, annotation: str) -> Optional[Any]:
    """Return the value of a marker annotation, or None if absent."""
    return annotations_of(cls).get(annotation)


__all__ = [
    "Bundle",
    "HealthCheck",
    "InjectableProvider",
    "Task",
    "Managed",
    "provider",
    "path",
    "annotations_of",
    "annotation_value",
    "PROVIDER_ANNOTATION",
    "PATH_ANNOTATION",
]
