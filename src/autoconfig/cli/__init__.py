"""Command line tooling for autoconfig.

Commands:
- scan: show the classes discovered under namespace roots
- manifest: generate the capability manifest
- verify: fail when a manifest no longer matches its namespaces
"""

from autoconfig.cli.main import app

__all__ = ["app"]
