"""Discovery settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class AutoConfigSettings:
    """Configuration for discovery at startup.

    Attributes:
        namespaces: Namespace roots to scan
        manifest_path: Capability manifest to load instead of scanning
        strict_imports: Fail on modules that cannot be imported
    """

    namespaces: Tuple[str, ...] = ()
    manifest_path: Optional[str] = None
    strict_imports: bool = True

    @classmethod
    def from_env(cls) -> "AutoConfigSettings":
        """Load configuration from environment variables.

        Environment variables:
            AUTOCONFIG_NAMESPACES: Comma-separated namespace roots
            AUTOCONFIG_MANIFEST: Path of a capability manifest (optional)
            AUTOCONFIG_STRICT_IMPORTS: Fail on import errors (default: true)

        Returns:
            AutoConfigSettings populated from environment
        """
        raw = os.getenv("AUTOCONFIG_NAMESPACES", "")
        return cls(
            namespaces=tuple(ns.strip() for ns in raw.split(",") if ns.strip()),
            manifest_path=os.getenv("AUTOCONFIG_MANIFEST") or None,
            strict_imports=os.getenv("AUTOCONFIG_STRICT_IMPORTS", "true").lower() == "true",
        )

    @property
    def uses_manifest(self) -> bool:
        return self.manifest_path is not None
