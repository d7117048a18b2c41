# -*- coding: utf-8 -*-
"""User provisioner - batch inserts users and resets the active test subject."""

# Standard
import logging
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

# Local
from ..api_client import RemoteGateway
from ..cleanup import clear_contact_methods
from ..facts import FactSynthesizer
from ..fixtures import ActiveSubject
from ..schemas import Profile, UserOptions, UserRole
from .base import BaseProvisioner, coerce_options

logger = logging.getLogger(__name__)

USER_COLUMNS = ("id", "name", "email", "role")

UPDATE_USER_MUTATION = """
    mutation updateUser($input: UpdateUserInput!) {
      updateUser(input: $input)
    }
"""

UserSpec = Union[UserOptions, Mapping[str, Any], None]


def build_batch_insert(profiles: Sequence[Profile]) -> Tuple[str, Dict[str, Any]]:
    """Build one multi-row insert for ``profiles`` with bound parameters.

    Returns:
        ``(statement, params)`` where each profile contributes one value tuple
        named ``:<column>_<index>``.
    """
    tuples = []
    params: Dict[str, Any] = {}
    for i, profile in enumerate(profiles):
        names = [f"{col}_{i}" for col in USER_COLUMNS]
        tuples.append("(" + ", ".join(f":{n}" for n in names) + ")")
        for col, name in zip(USER_COLUMNS, names):
            params[name] = getattr(profile, col)

    statement = f"insert into users ({', '.join(USER_COLUMNS)}) values " + ", ".join(tuples)
    return statement, params


class UserProvisioner(BaseProvisioner):
    """Create users through a single raw batch insert and reset profiles via GraphQL.

    Args:
        gateway: GraphQL gateway, used by ``reset_profile``.
        sql: Gateway executing the raw batch insert.
        facts: Default value synthesizer.
        subject: Active test subject, used when ``reset_profile`` gets no profile.
    """

    def __init__(self, gateway: RemoteGateway, sql: RemoteGateway, facts: FactSynthesizer, subject: ActiveSubject):
        super().__init__(gateway, facts, subject)
        self.sql = sql

    def get_name(self) -> str:
        return "users"

    def build_profile(self, options: UserSpec = None) -> Profile:
        opts = coerce_options(options, UserOptions)
        return Profile(
            id=self.facts.guid(),
            name=opts.name or self.facts.user_name(),
            email=opts.email or self.facts.email(),
            role=opts.role or UserRole.USER.value,
        )

    async def create_many_users(self, users: Sequence[UserSpec]) -> List[Profile]:
        """Create every user in ``users`` with exactly one remote statement.

        The result keeps the input order. If the statement fails nothing is
        returned and the error propagates.
        """
        profiles = [self.build_profile(u) for u in users]
        if not profiles:
            return []

        statement, params = build_batch_insert(profiles)
        await self.sql.execute(statement, params)

        for profile in profiles:
            self._track(profile.id)
        logger.info(f"Created {len(profiles)} user(s)")
        return profiles

    async def create_user(self, user: UserSpec = None) -> Profile:
        profiles = await self.create_many_users([user])
        return profiles[0]

    async def reset_profile(self, profile: Union[Profile, Mapping[str, Any], None] = None) -> Profile:
        """Return a profile to a known state.

        Clears all of the user's contact methods, then overwrites name, email
        and role. Without ``profile`` the active test subject is reset.

        Returns:
            The profile that was written back.
        """
        if profile is None:
            profile = await self.subject.get()
        elif not isinstance(profile, Profile):
            profile = Profile.model_validate(dict(profile))

        await clear_contact_methods(self.gateway, profile.id)
        await self.gateway.execute(
            UPDATE_USER_MUTATION,
            {
                "input": {
                    "id": profile.id,
                    "name": profile.name,
                    "email": profile.email,
                    "role": profile.role,
                }
            },
        )
        logger.info(f"Reset profile {profile.id}")
        return profile
