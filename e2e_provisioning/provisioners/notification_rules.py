# -*- coding: utf-8 -*-
"""Notification rule provisioner - creates rules, materializing missing dependencies.

Creation order is always user -> contact method -> notification rule. Each
level is only materialized when the caller did not supply its id, so passing
``contactMethodID`` short-circuits contact method creation entirely.
"""

# Standard
from enum import Enum
import logging
from typing import Any, Mapping, Union

# Local
from ..api_client import RemoteGateway
from ..facts import FactSynthesizer
from ..fixtures import ActiveSubject
from ..schemas import ContactMethodOptions, NotificationRule, NotificationRuleOptions
from .base import BaseProvisioner, coerce_options
from .contact_methods import ContactMethodProvisioner

logger = logging.getLogger(__name__)

CREATE_NOTIFICATION_RULE_MUTATION = """
    mutation ($input: CreateUserNotificationRuleInput!) {
      createUserNotificationRule(input: $input) {
        id
        delayMinutes
        contactMethodID
        contactMethod {
          id
          name
          type
          value
        }
      }
    }
"""

NotificationRuleSpec = Union[NotificationRuleOptions, Mapping[str, Any], None]


class Resolution(str, Enum):
    """Dependency resolution states of a notification rule request."""

    NEEDS_USER = "needs_user"
    NEEDS_CONTACT_METHOD = "needs_contact_method"
    READY = "ready"


def resolution_state(opts: NotificationRuleOptions) -> Resolution:
    if not opts.user_id:
        return Resolution.NEEDS_USER
    if not opts.contact_method_id:
        return Resolution.NEEDS_CONTACT_METHOD
    return Resolution.READY


class NotificationRuleProvisioner(BaseProvisioner):
    """Create notification rules for a user's contact method.

    Args:
        gateway: GraphQL gateway.
        facts: Default value synthesizer.
        subject: Active test subject.
        contact_methods: Provisioner used when the rule needs a new contact method.
    """

    def __init__(self, gateway: RemoteGateway, facts: FactSynthesizer, subject: ActiveSubject, contact_methods: ContactMethodProvisioner):
        super().__init__(gateway, facts, subject)
        self.contact_methods = contact_methods

    def get_name(self) -> str:
        return "notification_rules"

    async def resolve(self, opts: NotificationRuleOptions) -> NotificationRuleOptions:
        """Fill the missing user and contact method ids, one per transition.

        Every transition removes one missing dependency, so the loop ends after
        at most two steps.
        """
        state = resolution_state(opts)
        while state is not Resolution.READY:
            if state is Resolution.NEEDS_USER:
                user_id = await self.resolve_user_id(None)
                opts = opts.model_copy(update={"user_id": user_id})
            else:
                seed = opts.contact_method or ContactMethodOptions()
                cm = await self.contact_methods.add_contact_method(seed.model_copy(update={"user_id": opts.user_id}))
                opts = opts.model_copy(update={"contact_method_id": cm.id})
            next_state = resolution_state(opts)
            logger.debug(f"Notification rule resolution {state.value} -> {next_state.value}")
            state = next_state
        return opts

    async def add_notification_rule(self, options: NotificationRuleSpec = None) -> NotificationRule:
        """Add a notification rule. If userID is missing, the test subject's is used.

        Raises:
            FixtureLoadError: If the owner must come from the active subject and it cannot be loaded.
            RemoteExecutionError: If the backend rejects any of the mutations.
        """
        opts = await self.resolve(coerce_options(options, NotificationRuleOptions))
        delay = opts.delay_minutes if opts.delay_minutes is not None else self.facts.delay_minutes()

        data = await self.gateway.execute(
            CREATE_NOTIFICATION_RULE_MUTATION,
            {
                "input": {
                    "userID": opts.user_id,
                    "contactMethodID": opts.contact_method_id,
                    "delayMinutes": delay,
                }
            },
        )

        # Stamp the owner on both levels; the response may omit either.
        result = dict(data["createUserNotificationRule"])
        result["userID"] = opts.user_id
        result["contactMethod"] = dict(result["contactMethod"], userID=opts.user_id)

        rule = NotificationRule.model_validate(result)
        self._track(rule.id)
        return rule
