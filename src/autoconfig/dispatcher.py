"""Registration of discovered classes into the host framework.

Each category maps to one host registration call:

    bundle              -> bootstrap.add_bundle(instance)
    health_check        -> environment.health_checks.register(instance.name, instance)
    provider            -> environment.jersey.register(cls)
    injectable_provider -> environment.jersey.register(cls)
    resource            -> environment.jersey.register(cls)
    task                -> environment.admin.add_task(instance)
    managed             -> environment.lifecycle.manage(instance)

Providers and resources are handed over as classes so the host's own
injection machinery manages them; everything else is resolved first.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from autoconfig.capabilities import CapabilityCategory, get_capability
from autoconfig.catalog import ClassDescriptor
from autoconfig.errors import RegistrationError
from autoconfig.protocols import ContainerProtocol
from autoconfig.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """One completed registration."""

    category: CapabilityCategory
    descriptor: ClassDescriptor
    target: Any


# =============================================================================
# HOST REGISTRATION CALLS
# =============================================================================

def _add_bundle(bootstrap: Any, bundle: Any) -> None:
    bootstrap.add_bundle(bundle)


def _register_health_check(environment: Any, health_check: Any) -> None:
    name = getattr(health_check, "name", None)
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"health check has no usable name: {name!r}")
    environment.health_checks.register(name, health_check)


def _register_class(environment: Any, component: type) -> None:
    environment.jersey.register(component)


def _add_task(environment: Any, task: Any) -> None:
    environment.admin.add_task(task)


def _manage(environment: Any, managed: Any) -> None:
    environment.lifecycle.manage(managed)


_REGISTRARS: Dict[CapabilityCategory, Callable[[Any, Any], None]] = {
    CapabilityCategory.BUNDLE: _add_bundle,
    CapabilityCategory.HEALTH_CHECK: _register_health_check,
    CapabilityCategory.PROVIDER: _register_class,
    CapabilityCategory.INJECTABLE_PROVIDER: _register_class,
    CapabilityCategory.RESOURCE: _register_class,
    CapabilityCategory.TASK: _add_task,
    CapabilityCategory.MANAGED: _manage,
}


# =============================================================================
# DISPATCHER
# =============================================================================

class RegistrationDispatcher:
    """Resolves and registers the classes of one category at a time.

    There is no rollback: when a registration fails, the error propagates
    and earlier registrations stay in place.
    """

    def __init__(self, resolver: Callable[[ContainerProtocol, ClassDescriptor], Any] = resolve):
        """Initialize the dispatcher.

        Args:
            resolver: Function producing an instance from the container
        """
        self._resolve = resolver

    def dispatch(
        self,
        category: CapabilityCategory,
        descriptors: Iterable[ClassDescriptor],
        host: Any,
        container: ContainerProtocol,
    ) -> List[Registration]:
        """Register concrete descriptors of one category.

        Args:
            category: Category being registered
            descriptors: Concrete classes of that category
            host: Bootstrap object for bundles, environment otherwise
            container: Injection container

        Returns:
            The registrations performed, in order

        Raises:
            ResolutionError: If the container cannot build a class
            RegistrationError: If the host rejects a registration
        """
        capability = get_capability(category)
        registrar = _REGISTRARS[capability.category]
        registrations = []

        for descriptor in sorted(descriptors, key=lambda d: d.qualified_name):
            if capability.registers_instance:
                target = self._resolve(container, descriptor)
            else:
                target = descriptor.cls

            try:
                registrar(host, target)
            except RegistrationError:
                raise
            except Exception as e:
                raise RegistrationError(
                    f"Failed to register {capability.label} {descriptor.qualified_name}: {e}",
                    category=capability.category,
                    cls=descriptor.cls,
                ) from e

            logger.info(f"Added {capability.label}: {descriptor.qualified_name}")
            registrations.append(Registration(capability.category, descriptor, target))

        return registrations


__all__ = ["Registration", "RegistrationDispatcher"]
