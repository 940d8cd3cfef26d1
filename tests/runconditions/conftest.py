"""Shared fixtures for run condition tests."""

import logging

import pytest

from runconditions.conditions.base import BuildContext
from runconditions.conditions.loader import get_conditions_loader
from runconditions.config import get_settings
from runconditions.constants import BUILD_LOGGER
from runconditions.primitives.platform_matcher import PlatformFacts
from runconditions.runtime.platform_facts import get_platform_facts


@pytest.fixture(autouse=True)
def _setup_user_space(tmp_path, monkeypatch):
    """Point RUNCOND_USER_SPACE at a temporary directory for all tests."""
    user_space = tmp_path / "user_space"
    user_space.mkdir()

    monkeypatch.setenv("RUNCOND_USER_SPACE", str(user_space))
    monkeypatch.delenv("RUNCOND_LOG_DIR", raising=False)
    monkeypatch.delenv("RUNCOND_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    get_conditions_loader().clear_cache()
    get_platform_facts.cache_clear()

    yield user_space

    build_logger = logging.getLogger(BUILD_LOGGER)
    for handler in list(build_logger.handlers):
        handler.close()
        build_logger.removeHandler(handler)
    get_settings.cache_clear()
    get_conditions_loader().clear_cache()
    get_platform_facts.cache_clear()


@pytest.fixture
def workspace(tmp_path):
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws


@pytest.fixture
def build_logger():
    return logging.getLogger("tests.build_console")


@pytest.fixture
def context(workspace, tmp_path, build_logger):
    artifacts = tmp_path / "artifacts"
    artifacts.mkdir()
    return BuildContext(
        workspace=workspace,
        artifacts_dir=artifacts,
        home=tmp_path,
        variables={"BUILD_NUMBER": "42"},
        logger=build_logger,
    )


@pytest.fixture
def linux_facts():
    return PlatformFacts.from_values("Linux", "amd64", "5.15.0-91-generic", ":")


@pytest.fixture
def windows_facts():
    return PlatformFacts.from_values("Windows 10", "amd64", "10.0", ";")
