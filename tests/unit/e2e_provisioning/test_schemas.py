# -*- coding: utf-8 -*-
"""Tests for e2e_provisioning.schemas."""

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from e2e_provisioning.schemas import ContactMethod, ContactMethodOptions, NotificationRule, NotificationRuleOptions, Profile, UserOptions


def test_profile_defaults_role_to_user():
    profile = Profile(id="u1", name="Alice", email="alice@example.com")
    assert profile.role == "user"


def test_profile_rejects_unknown_role():
    with pytest.raises(ValidationError):
        Profile(id="u1", name="Alice", email="alice@example.com", role="root")


def test_records_are_frozen():
    profile = Profile(id="u1", name="Alice", email="alice@example.com")
    with pytest.raises(ValidationError):
        profile.name = "Bob"


def test_notification_rule_wire_round_trip():
    wire = {
        "id": "nr1",
        "userID": "u1",
        "contactMethodID": "cm1",
        "contactMethod": {"id": "cm1", "userID": "u1", "name": "SM CM x", "type": "SMS", "value": "+17633000000"},
        "delayMinutes": 3,
    }
    rule = NotificationRule.model_validate(wire)
    assert rule.user_id == "u1"
    assert rule.contact_method.user_id == "u1"
    assert rule.model_dump(by_alias=True) == wire


def test_notification_rule_rejects_negative_delay():
    with pytest.raises(ValidationError):
        NotificationRule(
            id="nr1",
            contactMethodID="cm1",
            contactMethod=ContactMethod(id="cm1", name="x", type="VOICE", value="+17633000000"),
            delayMinutes=-1,
        )


def test_options_accept_wire_and_python_names():
    assert ContactMethodOptions.model_validate({"userID": "u1"}).user_id == "u1"
    assert ContactMethodOptions.model_validate({"user_id": "u1"}).user_id == "u1"

    opts = NotificationRuleOptions.model_validate({"contactMethod": {"type": "VOICE"}, "delayMinutes": 0})
    assert opts.contact_method.type == "VOICE"
    assert opts.delay_minutes == 0


def test_options_reject_unknown_fields():
    with pytest.raises(ValidationError):
        UserOptions.model_validate({"nickname": "al"})


def test_contact_method_options_reject_unknown_type():
    with pytest.raises(ValidationError):
        ContactMethodOptions(type="EMAIL")
