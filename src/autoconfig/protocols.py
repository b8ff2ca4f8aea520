"""Protocol definitions for the collaborators autoconfig talks to.

These are typing.Protocol classes for static type checking. The injection
container and the host framework's bootstrap/environment objects are supplied
by the application; autoconfig never constructs them.
"""

from typing import Any, Protocol, runtime_checkable


# =============================================================================
# INJECTION CONTAINER
# =============================================================================

@runtime_checkable
class ContainerProtocol(Protocol):
    """Dependency-injection container.

    ``get_instance`` returns a fully-wired instance of ``cls`` and raises if
    no binding exists or a dependency cannot be satisfied.
    """

    def get_instance(self, cls: type) -> Any: ...


# =============================================================================
# HOST REGISTRIES
# =============================================================================

@runtime_checkable
class HealthCheckRegistryProtocol(Protocol):
    """Named health check registry. Rejects duplicate names."""

    def register(self, name: str, health_check: Any) -> None: ...


@runtime_checkable
class JerseyRegistryProtocol(Protocol):
    """Web layer registry. Receives classes, not instances."""

    def register(self, component: type) -> None: ...


@runtime_checkable
class AdminProtocol(Protocol):
    """Administrative task registry."""

    def add_task(self, task: Any) -> None: ...


@runtime_checkable
class LifecycleProtocol(Protocol):
    """Lifecycle owner for managed objects."""

    def manage(self, managed: Any) -> None: ...


# =============================================================================
# HOST PHASES
# =============================================================================

@runtime_checkable
class BootstrapProtocol(Protocol):
    """Host object available during the bootstrap phase."""

    def add_bundle(self, bundle: Any) -> None: ...


@runtime_checkable
class EnvironmentProtocol(Protocol):
    """Host object available during the run phase."""

    @property
    def health_checks(self) -> HealthCheckRegistryProtocol: ...

    @property
    def jersey(self) -> JerseyRegistryProtocol: ...

    @property
    def admin(self) -> AdminProtocol: ...

    @property
    def lifecycle(self) -> LifecycleProtocol: ...


__all__ = [
    "ContainerProtocol",
    "HealthCheckRegistryProtocol",
    "JerseyRegistryProtocol",
    "AdminProtocol",
    "LifecycleProtocol",
    "BootstrapProtocol",
    "EnvironmentProtocol",
]
