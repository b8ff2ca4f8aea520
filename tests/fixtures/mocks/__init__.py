"""In-memory host framework and container fakes for autoconfig tests.

Usage:
    from fixtures.mocks import FakeBootstrap, FakeContainer, FakeEnvironment
"""

from .host_mocks import (
    FakeAdmin,
    FakeBootstrap,
    FakeContainer,
    FakeEnvironment,
    FakeHealthCheckRegistry,
    FakeJersey,
    FakeLifecycle,
)

__all__ = [
    "FakeAdmin",
    "FakeBootstrap",
    "FakeContainer",
    "FakeEnvironment",
    "FakeHealthCheckRegistry",
    "FakeJersey",
    "FakeLifecycle",
]
