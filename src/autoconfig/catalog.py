"""Class catalog built from namespace roots.

The catalog is the scanned view of every class defined under a set of
namespace roots (dotted name prefixes). It is built once, at startup, and
is read-only afterwards.

Usage:
    catalog = build_catalog(["myservice"])
    for descriptor in catalog.sorted():
        print(descriptor.qualified_name, descriptor.is_abstract)
"""

import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass, field
from types import ModuleType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

from autoconfig.errors import ConfigurationError
from autoconfig.markers import annotations_of

logger = logging.getLogger(__name__)


# =============================================================================
# DATA MODEL
# =============================================================================

@dataclass(frozen=True)
class ClassDescriptor:
    """A discovered class.

    Attributes:
        cls: The class object
        qualified_name: ``module.QualName``
        module: Name of the defining module
        supertypes: MRO without the class itself and ``object``
        annotations: Marker annotation names on the class or its bases
        is_abstract: True if the class cannot be instantiated
    """

    cls: type
    qualified_name: str
    module: str
    supertypes: Tuple[type, ...] = ()
    annotations: FrozenSet[str] = frozenset()
    is_abstract: bool = False

    @classmethod
    def of(cls, klass: type) -> "ClassDescriptor":
        """Describe a class."""
        return cls(
            cls=klass,
            qualified_name=qualified_name(klass),
            module=klass.__module__,
            supertypes=tuple(t for t in klass.__mro__[1:] if t is not object),
            annotations=frozenset(annotations_of(klass)),
            is_abstract=is_abstract(klass),
        )

    def is_subtype_of(self, marker: type) -> bool:
        return marker in self.supertypes

    def has_annotation(self, annotation: str) -> bool:
        return annotation in self.annotations


@dataclass(frozen=True)
class Catalog:
    """Immutable set of ClassDescriptors reachable from namespace roots."""

    namespaces: Tuple[str, ...]
    descriptors: FrozenSet[ClassDescriptor] = field(default_factory=frozenset)
    _by_name: Dict[str, ClassDescriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_by_name", {d.qualified_name: d for d in self.descriptors}
        )

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    def get(self, name: str) -> Optional[ClassDescriptor]:
        """Look up a descriptor by qualified name."""
        return self._by_name.get(name)

    def sorted(self) -> List[ClassDescriptor]:
        """Descriptors ordered by qualified name."""
        return sorted(self.descriptors, key=lambda d: d.qualified_name)

    @classmethod
    def from_classes(
        cls,
        classes: Iterable[type],
        namespaces: Sequence[str] = (),
    ) -> "Catalog":
        """Build a catalog from an explicit list of classes (no scanning)."""
        return cls(
            namespaces=tuple(namespaces),
            descriptors=frozenset(ClassDescriptor.of(klass) for klass in classes),
        )


def qualified_name(klass: type) -> str:
    return f"{klass.__module__}.{klass.__qualname__}"


def is_abstract(klass: type) -> bool:
    """True for ABCs with unimplemented methods, Protocols, and ``__abstract__ = True``."""
    if inspect.isabstract(klass):
        return True
    if vars(klass).get("__abstract__", False):
        return True
    return bool(getattr(klass, "_is_protocol", False))


# =============================================================================
# SCANNING
# =============================================================================

def validate_namespaces(namespaces: Sequence[str]) -> Tuple[str, ...]:
    """Check namespace roots before any scanning happens.

    Raises:
        ConfigurationError: If no roots are given or a root is blank
    """
    if isinstance(namespaces, str):
        namespaces = [namespaces]
    roots = tuple(namespaces)
    if not roots:
        raise ConfigurationError("At least one namespace root is required")
    for root in roots:
        if not isinstance(root, str) or not root.strip():
            raise ConfigurationError(f"Invalid namespace root: {root!r}")
    return tuple(root.strip() for root in roots)


def build_catalog(namespaces: Sequence[str], strict_imports: bool = True) -> Catalog:
    """Scan namespace roots and build the catalog.

    Args:
        namespaces: Dotted prefixes; a class is cataloged when its
            qualified name (``module.QualName``) starts with one of them
        strict_imports: Raise on modules that fail to import instead of
            logging and skipping them

    Returns:
        Catalog of every class defined under the roots

    Raises:
        ConfigurationError: If ``namespaces`` is empty, or a module fails to
            import while ``strict_imports`` is set
    """
    roots = validate_namespaces(namespaces)
    scanner = _Scanner(strict_imports)
    descriptors = set()
    for root in roots:
        for module in scanner.modules_under(root):
            for klass in _classes_defined_in(module):
                if qualified_name(klass).startswith(root):
                    descriptors.add(ClassDescriptor.of(klass))

    catalog = Catalog(namespaces=roots, descriptors=frozenset(descriptors))
    logger.debug(f"Built catalog for {', '.join(roots)}: {len(catalog)} classes")
    return catalog


class _Scanner:
    """Imports modules under a namespace root."""

    def __init__(self, strict_imports: bool):
        self.strict_imports = strict_imports

    def modules_under(self, root: str) -> List[ModuleType]:
        base = self._import_base(root)
        if base is None:
            logger.warning(f"No importable module for namespace root '{root}'")
            return []

        modules = [base]
        if not hasattr(base, "__path__"):
            return modules

        for info in pkgutil.walk_packages(
            base.__path__, prefix=f"{base.__name__}.", onerror=self._walk_failed
        ):
            if not _may_define(info.name, root):
                continue
            module = self._import(info.name)
            if module is not None:
                modules.append(module)
        return modules

    def _import_base(self, root: str) -> Optional[ModuleType]:
        """Import the root, or the closest parent package for a partial name."""
        candidate = root
        while candidate:
            try:
                return importlib.import_module(candidate)
            except ModuleNotFoundError as e:
                if e.name is None or not (candidate == e.name or candidate.startswith(f"{e.name}.")):
                    return self._failed(candidate, e)
            except Exception as e:
                return self._failed(candidate, e)
            candidate = candidate.rpartition(".")[0]
        return None

    def _import(self, name: str) -> Optional[ModuleType]:
        try:
            return importlib.import_module(name)
        except Exception as e:
            return self._failed(name, e)

    def _walk_failed(self, name: str) -> None:
        if self.strict_imports:
            raise ConfigurationError(f"Failed to import package {name}")
        logger.warning(f"Skipping package {name}: import failed")

    def _failed(self, name: str, error: Exception) -> None:
        if self.strict_imports:
            raise ConfigurationError(f"Failed to import module {name}: {error}") from error
        logger.warning(f"Skipping module {name}: {error}")
        return None


def _may_define(module_name: str, root: str) -> bool:
    """True if a class in ``module_name`` can have a name under ``root``."""
    return module_name.startswith(root) or root.startswith(f"{module_name}.")


def _classes_defined_in(module: ModuleType) -> List[type]:
    """Classes defined in a module, nested classes included."""
    found: List[type] = []
    pending = [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__
    ]
    while pending:
        klass = pending.pop()
        if klass in found:
            continue
        found.append(klass)
        for value in vars(klass).values():
            # Only classes declared in the body; aliases to other classes are skipped
            if (
                inspect.isclass(value)
                and value.__module__ == module.__name__
                and value.__qualname__.startswith(f"{klass.__qualname__}.")
            ):
                pending.append(value)
    return found


__all__ = [
    "ClassDescriptor",
    "Catalog",
    "build_catalog",
    "validate_namespaces",
    "qualified_name",
    "is_abstract",
]
