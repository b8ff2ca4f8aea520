"""Capability categories and the classification table.

Each category pairs a marker with the host extension point it feeds and the
phase in which it is registered. Categories are independent predicates: one
class may match several of them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Tuple, Union

from autoconfig.catalog import Catalog, ClassDescriptor
from autoconfig.markers import (
    PATH_ANNOTATION,
    PROVIDER_ANNOTATION,
    Bundle,
    HealthCheck,
    InjectableProvider,
    Managed,
    Task,
)


class CapabilityCategory(str, Enum):
    """The seven fixed registration categories."""

    BUNDLE = "bundle"
    HEALTH_CHECK = "health_check"
    PROVIDER = "provider"
    INJECTABLE_PROVIDER = "injectable_provider"
    RESOURCE = "resource"
    TASK = "task"
    MANAGED = "managed"


class Phase(str, Enum):
    """Host extension windows."""

    BOOTSTRAP = "bootstrap"  # initialize()
    RUN = "run"              # run()


class MarkerKind(str, Enum):
    SUBTYPE = "subtype"
    ANNOTATION = "annotation"


@dataclass(frozen=True)
class CapabilityDescriptor:
    """How a category is recognised and registered.

    Attributes:
        category: The category
        kind: Whether ``marker`` is a base class or an annotation name
        marker: Marker base class or annotation name
        phase: Phase in which the category is registered
        label: Label used in the registration log line
        registers_instance: False when the host receives the class itself
    """

    category: CapabilityCategory
    kind: MarkerKind
    marker: Union[type, str]
    phase: Phase
    label: str
    registers_instance: bool = True

    def matches(self, descriptor: ClassDescriptor) -> bool:
        if self.kind is MarkerKind.SUBTYPE:
            return descriptor.is_subtype_of(self.marker)
        return descriptor.has_annotation(self.marker)


CAPABILITIES: Dict[CapabilityCategory, CapabilityDescriptor] = {
    CapabilityCategory.BUNDLE: CapabilityDescriptor(
        category=CapabilityCategory.BUNDLE,
        kind=MarkerKind.SUBTYPE,
        marker=Bundle,
        phase=Phase.BOOTSTRAP,
        label="bundle class",
    ),
    CapabilityCategory.HEALTH_CHECK: CapabilityDescriptor(
        category=CapabilityCategory.HEALTH_CHECK,
        kind=MarkerKind.SUBTYPE,
        marker=HealthCheck,
        phase=Phase.RUN,
        label="injectableHealthCheck",
    ),
    CapabilityCategory.PROVIDER: CapabilityDescriptor(
        category=CapabilityCategory.PROVIDER,
        kind=MarkerKind.ANNOTATION,
        marker=PROVIDER_ANNOTATION,
        phase=Phase.RUN,
        label="provider class",
        registers_instance=False,
    ),
    CapabilityCategory.INJECTABLE_PROVIDER: CapabilityDescriptor(
        category=CapabilityCategory.INJECTABLE_PROVIDER,
        kind=MarkerKind.SUBTYPE,
        marker=InjectableProvider,
        phase=Phase.RUN,
        label="injectableProvider",
        registers_instance=False,
    ),
    CapabilityCategory.RESOURCE: CapabilityDescriptor(
        category=CapabilityCategory.RESOURCE,
        kind=MarkerKind.ANNOTATION,
        marker=PATH_ANNOTATION,
        phase=Phase.RUN,
        label="resource class",
        registers_instance=False,
    ),
    CapabilityCategory.TASK: CapabilityDescriptor(
        category=CapabilityCategory.TASK,
        kind=MarkerKind.SUBTYPE,
        marker=Task,
        phase=Phase.RUN,
        label="task",
    ),
    CapabilityCategory.MANAGED: CapabilityDescriptor(
        category=CapabilityCategory.MANAGED,
        kind=MarkerKind.SUBTYPE,
        marker=Managed,
        phase=Phase.RUN,
        label="managed",
    ),
}

# Registration order within each phase
BOOTSTRAP_ORDER: Tuple[CapabilityCategory, ...] = (CapabilityCategory.BUNDLE,)
RUN_ORDER: Tuple[CapabilityCategory, ...] = (
    CapabilityCategory.HEALTH_CHECK,
    CapabilityCategory.PROVIDER,
    CapabilityCategory.INJECTABLE_PROVIDER,
    CapabilityCategory.RESOURCE,
    CapabilityCategory.TASK,
    CapabilityCategory.MANAGED,
)


def get_capability(category: CapabilityCategory) -> CapabilityDescriptor:
    return CAPABILITIES[CapabilityCategory(category)]


def classify(catalog: Catalog, category: CapabilityCategory) -> FrozenSet[ClassDescriptor]:
    """Return every cataloged class carrying the category's marker."""
    capability = get_capability(category)
    return frozenset(d for d in catalog if capability.matches(d))


def filter_concrete(descriptors: Iterable[ClassDescriptor]) -> FrozenSet[ClassDescriptor]:
    """Drop abstract (non-instantiable) descriptors."""
    return frozenset(d for d in descriptors if not d.is_abstract)


def categories_of(descriptor: ClassDescriptor) -> Tuple[CapabilityCategory, ...]:
    """All categories a class matches, in registration order."""
    return tuple(
        category
        for category in BOOTSTRAP_ORDER + RUN_ORDER
        if CAPABILITIES[category].matches(descriptor)
    )


__all__ = [
    "CapabilityCategory",
    "Phase",
    "MarkerKind",
    "CapabilityDescriptor",
    "CAPABILITIES",
    "BOOTSTRAP_ORDER",
    "RUN_ORDER",
    "get_capability",
    "classify",
    "filter_concrete",
    "categories_of",
]
