"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: one fake per
OS collaborator service, a bundle of them, and a resolver that points the
engine at a throwaway directory tree.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from fakes import (
    FakeCredentialStore,
    FakePackageRegistry,
    FakePowerControl,
    FakePrivilegeService,
    FakeProcessService,
    FakeServiceManager,
)
from officecleanup.core.paths import PathResolver
from officecleanup.services.base import Services
from officecleanup.utils.shell import CommandResult


@pytest.fixture
def processes() -> FakeProcessService:
    """Empty process table."""
    return FakeProcessService()


@pytest.fixture
def privileges() -> FakePrivilegeService:
    """Elevation that is granted."""
    return FakePrivilegeService()


@pytest.fixture
def receipts() -> FakePackageRegistry:
    """Empty receipt database."""
    return FakePackageRegistry()


@pytest.fixture
def credentials() -> FakeCredentialStore:
    """Empty keychain."""
    return FakeCredentialStore()


@pytest.fixture
def launchd() -> FakeServiceManager:
    """Service manager accepting every unload."""
    return FakeServiceManager()


@pytest.fixture
def power() -> FakePowerControl:
    """Power control recording restarts."""
    return FakePowerControl()


@pytest.fixture
def services(
    processes: FakeProcessService,
    privileges: FakePrivilegeService,
    receipts: FakePackageRegistry,
    credentials: FakeCredentialStore,
    launchd: FakeServiceManager,
    power: FakePowerControl,
) -> Services:
    """Service bundle made of the individual fakes."""
    return Services(
        processes=processes,
        privileges=privileges,
        receipts=receipts,
        credentials=credentials,
        launchd=launchd,
        power=power,
    )


@pytest.fixture
def resolver(tmp_path: Path) -> PathResolver:
    """Resolver rooted in a temporary home and system root."""
    home = tmp_path / "home"
    root = tmp_path / "root"
    home.mkdir()
    root.mkdir()
    return PathResolver(home=home, root=root)


@pytest.fixture
def no_xattr():
    """Stub out ``xattr -cr`` calls made during removal."""
    with patch(
        "officecleanup.engine.reclaimer.run_command",
        return_value=CommandResult(stdout="", stderr="", returncode=0),
    ) as mock:
        yield mock
