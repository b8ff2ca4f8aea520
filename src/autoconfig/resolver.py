"""Instance resolution through the injection container."""

import logging
from typing import Any

from autoconfig.catalog import ClassDescriptor
from autoconfig.errors import ResolutionError
from autoconfig.protocols import ContainerProtocol

logger = logging.getLogger(__name__)


def resolve(container: ContainerProtocol, descriptor: ClassDescriptor) -> Any:
    """Ask the container for an instance of a discovered class.

    One container call per invocation. Nothing is cached here; whether two
    calls for the same class share an instance is up to the container.

    Raises:
        ResolutionError: If the container cannot build the class
    """
    logger.debug(f"Resolving {descriptor.qualified_name}")
    try:
        return container.get_instance(descriptor.cls)
    except ResolutionError:
        raise
    except Exception as e:
        raise ResolutionError(
            f"Container could not resolve {descriptor.qualified_name}: {e}",
            cls=descriptor.cls,
        ) from e


__all__ = ["resolve"]
