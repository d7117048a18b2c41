# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Shared fixtures: an in-memory stand-in for the GraphQL backend, a seeded
synthesizer and an active test subject.
"""

# Standard
import itertools
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from unittest.mock import AsyncMock, MagicMock

# Third-Party
import pytest

# First-Party
from e2e_provisioning.api_client import RemoteExecutionError
from e2e_provisioning.facts import FactSynthesizer
from e2e_provisioning.fixtures import ActiveSubject
from e2e_provisioning.schemas import Profile

Failure = Union[Exception, Callable[[Dict[str, Any]], Optional[Exception]]]

# Checked in order: the rule mutation also selects a nested contactMethod.
_OPERATIONS = [
    ("createUserNotificationRule", "createUserNotificationRule"),
    ("createUserContactMethod", "createUserContactMethod"),
    ("updateUser(", "updateUser"),
    ("deleteAll(", "deleteAll"),
    ("contactMethods", "userContactMethods"),
]


class FakeBackend:
    """Records every execute() call and answers like the real GraphQL API.

    Responses deliberately leave out ``userID`` back-references, as the real
    mutations do.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.users: Dict[str, Dict[str, Any]] = {}
        self.contact_methods: Dict[str, Dict[str, Any]] = {}
        self.rules: Dict[str, Dict[str, Any]] = {}
        self.fail_on: Dict[str, Failure] = {}
        self._ids = itertools.count(1)

    def add_user(self, profile: Profile) -> None:
        self.users[profile.id] = profile.model_dump()

    def ops(self) -> List[str]:
        return [op for op, _ in self.calls]

    @staticmethod
    def operation(query: str) -> str:
        for marker, op in _OPERATIONS:
            if marker in query:
                return op
        raise AssertionError(f"Unexpected query: {query}")

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        variables = variables or {}
        op = self.operation(query)
        self.calls.append((op, variables))

        failure = self.fail_on.get(op)
        if failure is not None:
            exc = failure(variables) if callable(failure) else failure
            if exc is not None:
                raise exc

        return getattr(self, f"_{op}")(variables)

    def _createUserContactMethod(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        cm = dict(variables["input"], id=f"cm-{next(self._ids)}")
        self.contact_methods[cm["id"]] = cm
        return {"createUserContactMethod": {k: cm[k] for k in ("id", "name", "type", "value")}}

    def _createUserNotificationRule(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        inp = variables["input"]
        cm = self.contact_methods.get(inp["contactMethodID"])
        if cm is None:
            raise RemoteExecutionError(f"contact method {inp['contactMethodID']} not found", errors=[{"message": "not found"}])
        rule = dict(inp, id=f"nr-{next(self._ids)}")
        self.rules[rule["id"]] = rule
        return {
            "createUserNotificationRule": {
                "id": rule["id"],
                "delayMinutes": rule["delayMinutes"],
                "contactMethodID": cm["id"],
                "contactMethod": {k: cm[k] for k in ("id", "name", "type", "value")},
            }
        }

    def _updateUser(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        inp = variables["input"]
        self.users[inp["id"]] = dict(inp)
        return {"updateUser": True}

    def _deleteAll(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        for target in variables["input"]:
            self.contact_methods.pop(target["id"], None)
        return {"deleteAll": True}

    def _userContactMethods(self, variables: Dict[str, Any]) -> Dict[str, Any]:
        user_id = variables["id"]
        if user_id not in self.users:
            return {"user": None}
        owned = [{"id": cm_id} for cm_id, cm in self.contact_methods.items() if cm["userID"] == user_id]
        return {"user": {"contactMethods": owned}}


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sql_gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.execute = AsyncMock(return_value={"rowcount": 1})
    return gateway


@pytest.fixture
def facts() -> FactSynthesizer:
    return FactSynthesizer(seed=1234)


@pytest.fixture
def test_profile() -> Profile:
    return Profile(id="00000000-0000-4000-8000-000000000001", name="Test Subject", email="subject@example.com", role="admin")


@pytest.fixture
def subject(test_profile: Profile, backend: FakeBackend) -> ActiveSubject:
    backend.add_user(test_profile)
    return ActiveSubject.from_profile(test_profile)
