# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/fixtures.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Named fixture loading and the active test subject.

The active test subject is passed explicitly to provisioners as an
``ActiveSubject``. It either wraps a known profile or knows which fixture to
load; loading happens on every ``get()`` so the latest persisted profile wins.
"""

# Standard
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-Party
import orjson
from pydantic import ValidationError

# Local
from .schemas import Profile

logger = logging.getLogger(__name__)


class FixtureLoadError(Exception):
    """A named fixture could not be loaded or does not describe a profile."""


class FixtureLoader:
    """Loads ``<fixtures_dir>/<name>.json`` files."""

    def __init__(self, fixtures_dir: Union[str, Path]):
        self.fixtures_dir = Path(fixtures_dir)

    def path_for(self, name: str) -> Path:
        return self.fixtures_dir / f"{name}.json"

    def load(self, name: str) -> Dict[str, Any]:
        """Load a fixture by name.

        Raises:
            FixtureLoadError: If the file is missing, unreadable or not a JSON object.
        """
        path = self.path_for(name)
        try:
            data = orjson.loads(path.read_bytes())
        except FileNotFoundError as exc:
            raise FixtureLoadError(f"Fixture not found: {path}") from exc
        except (OSError, orjson.JSONDecodeError) as exc:
            raise FixtureLoadError(f"Failed to read fixture {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise FixtureLoadError(f"Fixture {path} must contain a JSON object, got {type(data).__name__}")
        return data

    def save(self, name: str, data: Dict[str, Any]) -> Path:
        """Persist ``data`` as fixture ``name`` and return its path."""
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
        return path


class ActiveSubject:
    """The user profile standing in for "the current user" of a test run.

    Args:
        profile: A known profile; returned as-is by ``get()``.
        loader: Fixture loader used when no profile is given.
        fixture_name: Fixture holding the profile (default ``profile``).
    """

    def __init__(self, profile: Optional[Profile] = None, loader: Optional[FixtureLoader] = None, fixture_name: str = "profile"):
        if profile is None and loader is None:
            raise ValueError("ActiveSubject needs a profile or a fixture loader")
        self._profile = profile
        self._loader = loader
        self.fixture_name = fixture_name

    @classmethod
    def from_profile(cls, profile: Union[Profile, Dict[str, Any]]) -> "ActiveSubject":
        if not isinstance(profile, Profile):
            profile = Profile.model_validate(profile)
        return cls(profile=profile)

    async def get(self) -> Profile:
        """Return the active test subject's profile.

        Raises:
            FixtureLoadError: If the fixture is missing or is not a valid profile.
        """
        if self._profile is not None:
            return self._profile

        data = self._loader.load(self.fixture_name)
        try:
            profile = Profile.model_validate(data)
        except ValidationError as exc:
            raise FixtureLoadError(f"Fixture '{self.fixture_name}' is not a valid profile: {exc}") from exc
        logger.debug(f"Loaded active test subject {profile.id} from fixture '{self.fixture_name}'")
        return profile
