# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/cleanup.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Teardown of a user's contact methods.

Deletions are independent: each contact method gets its own ``deleteAll``
mutation, every deletion is attempted, and failures are raised together once
all attempts are done.
"""

# Standard
import logging
from typing import List, Tuple

# Local
from .api_client import RemoteExecutionError, RemoteGateway

logger = logging.getLogger(__name__)

CONTACT_METHOD_IDS_QUERY = """
    query ($id: ID!) {
      user(id: $id) {
        contactMethods {
          id
        }
      }
    }
"""

DELETE_ALL_MUTATION = """
    mutation ($input: [TargetInput!]!) {
      deleteAll(input: $input)
    }
"""

CONTACT_METHOD_TARGET_TYPE = "contactMethod"


class CleanupError(Exception):
    """One or more deletions failed.

    Attributes:
        failures: ``(contact method id, exception)`` for every failed deletion.
        deleted: Number of deletions that succeeded.
    """

    def __init__(self, failures: List[Tuple[str, Exception]], deleted: int):
        ids = ", ".join(cm_id for cm_id, _ in failures)
        super().__init__(f"Failed to delete {len(failures)} contact method(s): {ids}")
        self.failures = failures
        self.deleted = deleted


async def list_contact_method_ids(gateway: RemoteGateway, user_id: str) -> List[str]:
    """Return the ids of every contact method owned by ``user_id``."""
    data = await gateway.execute(CONTACT_METHOD_IDS_QUERY, {"id": user_id})
    user = data.get("user")
    if user is None:
        raise RemoteExecutionError(f"User {user_id} not found")
    return [cm["id"] for cm in user.get("contactMethods") or []]


async def clear_contact_methods(gateway: RemoteGateway, user_id: str) -> int:
    """Delete every contact method owned by ``user_id``.

    A user without contact methods is a no-op: no mutation is issued.

    Returns:
        Number of contact methods deleted.

    Raises:
        CleanupError: If any deletion failed, after all were attempted.
    """
    cm_ids = await list_contact_method_ids(gateway, user_id)
    if not cm_ids:
        return 0

    deleted = 0
    failures: List[Tuple[str, Exception]] = []
    for cm_id in cm_ids:
        try:
            await gateway.execute(DELETE_ALL_MUTATION, {"input": [{"type": CONTACT_METHOD_TARGET_TYPE, "id": cm_id}]})
            deleted += 1
        except Exception as exc:
            logger.warning(f"Failed to delete contact method {cm_id}: {exc}")
            failures.append((cm_id, exc))

    logger.info(f"Deleted {deleted}/{len(cm_ids)} contact methods of user {user_id} (errors: {len(failures)})")
    if failures:
        raise CleanupError(failures, deleted)
    return deleted
