# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/pytest_plugin.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

pytest fixtures for end-to-end suites.

Enable from a conftest.py::

    pytest_plugins = ["e2e_provisioning.pytest_plugin"]

Then request ``provisioning`` in an async test, or ``reset_profile`` to start
from a clean active test subject.
"""

# Standard
from typing import AsyncGenerator

# Third-Party
import pytest
import pytest_asyncio

# Local
from .config import get_settings, Settings
from .schemas import Profile
from .session import ProvisioningSession


@pytest.fixture(scope="session")
def provisioning_settings() -> Settings:
    """Settings read from E2E_* environment variables."""
    return get_settings()


@pytest_asyncio.fixture
async def provisioning(provisioning_settings: Settings) -> AsyncGenerator[ProvisioningSession, None]:
    """A provisioning session bound to the configured backend, closed after the test."""
    async with ProvisioningSession.from_settings(provisioning_settings) as session:
        yield session


@pytest_asyncio.fixture
async def reset_profile(provisioning: ProvisioningSession) -> Profile:
    """Reset the active test subject before the test and return its profile."""
    return await provisioning.commands.reset_profile()
