# -*- coding: utf-8 -*-
"""Contact method provisioner - creates contact methods via createUserContactMethod."""

# Standard
import logging
from typing import Any, Mapping, Union

# Local
from ..schemas import ContactMethod, ContactMethodOptions, ContactMethodType
from .base import BaseProvisioner, coerce_options

logger = logging.getLogger(__name__)

CREATE_CONTACT_METHOD_MUTATION = """
    mutation ($input: CreateUserContactMethodInput!) {
      createUserContactMethod(input: $input) {
        id
        name
        type
        value
      }
    }
"""

CONTACT_METHOD_TYPES = [t.value for t in ContactMethodType]

ContactMethodSpec = Union[ContactMethodOptions, Mapping[str, Any], None]


class ContactMethodProvisioner(BaseProvisioner):
    """Create contact methods, defaulting to the active test subject as owner."""

    def get_name(self) -> str:
        return "contact_methods"

    async def add_contact_method(self, options: ContactMethodSpec = None) -> ContactMethod:
        """Add a contact method. If userID is missing, the test subject's is used.

        Raises:
            FixtureLoadError: If the owner must come from the active subject and it cannot be loaded.
            RemoteExecutionError: If the backend rejects the mutation.
        """
        opts = coerce_options(options, ContactMethodOptions)
        user_id = await self.resolve_user_id(opts.user_id)

        data = await self.gateway.execute(
            CREATE_CONTACT_METHOD_MUTATION,
            {
                "input": {
                    "userID": user_id,
                    "name": opts.name or self.facts.contact_method_name(),
                    "type": opts.type or self.facts.pick_one(CONTACT_METHOD_TYPES),
                    "value": opts.value or self.facts.phone_number(),
                }
            },
        )

        # The response does not echo the owner back.
        result = dict(data["createUserContactMethod"], userID=user_id)
        contact_method = ContactMethod.model_validate(result)
        self._track(contact_method.id)
        return contact_method
