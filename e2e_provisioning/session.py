# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/session.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Provisioning session: wires gateways, synthesizer, active subject, provisioners
and the command registry together.

Typical use from a test::

    async with ProvisioningSession.from_settings(get_settings()) as session:
        rule = await session.commands.add_notification_rule({"delayMinutes": 5})
"""

# Standard
import logging
from typing import Any, Optional

# Local
from .api_client import GraphQLClient, RemoteGateway
from .cleanup import clear_contact_methods
from .commands import CommandRegistry
from .config import Settings
from .facts import FactSynthesizer
from .fixtures import ActiveSubject, FixtureLoader
from .provisioners import ContactMethodProvisioner, NotificationRuleProvisioner, UserProvisioner
from .sql_client import SQLClient

logger = logging.getLogger(__name__)


class ProvisioningSession:
    """Holds everything a test needs to provision entities.

    Args:
        gateway: GraphQL gateway.
        sql: Raw statement gateway for batch user inserts.
        subject: Active test subject.
        facts: Default value synthesizer; a fresh one is created when omitted.
    """

    def __init__(self, gateway: RemoteGateway, sql: RemoteGateway, subject: ActiveSubject, facts: Optional[FactSynthesizer] = None):
        self.gateway = gateway
        self.sql = sql
        self.subject = subject
        self.facts = facts or FactSynthesizer()

        self.users = UserProvisioner(gateway, sql, self.facts, subject)
        self.contact_methods = ContactMethodProvisioner(gateway, self.facts, subject)
        self.notification_rules = NotificationRuleProvisioner(gateway, self.facts, subject, self.contact_methods)

        self.commands = CommandRegistry()
        self.commands.add("create_user", self.users.create_user)
        self.commands.add("create_many_users", self.users.create_many_users)
        self.commands.add("reset_profile", self.users.reset_profile)
        self.commands.add("add_contact_method", self.contact_methods.add_contact_method)
        self.commands.add("add_notification_rule", self.notification_rules.add_notification_rule)
        self.commands.add("clear_contact_methods", self.clear_contact_methods)

    @classmethod
    def from_settings(cls, settings: Settings, subject: Optional[ActiveSubject] = None) -> "ProvisioningSession":
        """Build a session talking to the backend described by ``settings``.

        Without ``subject`` the active test subject is read from
        ``settings.profile_fixture`` in ``settings.fixtures_dir``.
        """
        token = settings.api_token.get_secret_value() if settings.api_token else None
        gateway = GraphQLClient(settings.base_url, path=settings.graphql_path, token=token, timeout=settings.request_timeout)
        sql = SQLClient(settings.database_url)
        if subject is None:
            subject = ActiveSubject(loader=FixtureLoader(settings.fixtures_dir), fixture_name=settings.profile_fixture)
        return cls(gateway, sql, subject, FactSynthesizer(seed=settings.faker_seed))

    async def clear_contact_methods(self, user_id: Optional[str] = None) -> int:
        """Delete a user's contact methods; the active test subject's by default."""
        if user_id is None:
            user_id = (await self.subject.get()).id
        return await clear_contact_methods(self.gateway, user_id)

    async def close(self):
        for client in (self.gateway, self.sql):
            close = getattr(client, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> "ProvisioningSession":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
