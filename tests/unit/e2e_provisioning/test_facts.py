# -*- coding: utf-8 -*-
"""Tests for e2e_provisioning.facts."""

# Standard
import re
import uuid

# Third-Party
import pytest

# First-Party
from e2e_provisioning.facts import CONTACT_METHOD_NAME_PREFIX, FactSynthesizer

EMAIL_RE = re.compile(r"^[^@\s]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")
PHONE_RE = re.compile(r"^\+1763[3]\d{6}$")


@pytest.mark.parametrize("length", [1, 8, 12])
def test_word_exact_length(facts, length):
    word = facts.word(length=length)
    assert len(word) == length
    assert word.isalpha() and word.islower()


def test_word_without_length_is_lowercase(facts):
    assert facts.word().islower()


def test_word_rejects_non_positive_length(facts):
    with pytest.raises(ValueError):
        facts.word(length=0)


def test_phone_number_is_from_test_pool(facts):
    for _ in range(200):
        phone = facts.phone_number()
        assert PHONE_RE.match(phone), phone
        assert 3000000 <= int(phone[len("+1763") :]) <= 3999999


def test_email_is_valid_and_varies(facts):
    emails = {facts.email() for _ in range(50)}
    assert len(emails) == 50
    for email in emails:
        assert EMAIL_RE.match(email), email


def test_integer_is_inclusive(facts):
    values = {facts.integer(0, 2) for _ in range(200)}
    assert values == {0, 1, 2}


def test_integer_empty_range(facts):
    with pytest.raises(ValueError, match="empty integer range"):
        facts.integer(5, 4)


def test_guid_unique_even_with_same_seed():
    a = FactSynthesizer(seed=7)
    b = FactSynthesizer(seed=7)
    ids = [a.guid(), b.guid()]
    assert ids[0] != ids[1]
    for value in ids:
        assert uuid.UUID(value).version == 4


def test_seed_makes_values_reproducible():
    a = FactSynthesizer(seed=99)
    b = FactSynthesizer(seed=99)
    assert [a.phone_number() for _ in range(5)] == [b.phone_number() for _ in range(5)]
    assert a.user_name() == b.user_name()


def test_pick_one(facts):
    assert facts.pick_one(["SMS", "VOICE"]) in {"SMS", "VOICE"}
    with pytest.raises(ValueError):
        facts.pick_one([])


def test_delay_minutes_range(facts):
    assert all(0 <= facts.delay_minutes() <= 15 for _ in range(100))


def test_named_defaults(facts):
    assert len(facts.user_name()) == 12
    name = facts.contact_method_name()
    assert name.startswith(CONTACT_METHOD_NAME_PREFIX)
    assert len(name) == len(CONTACT_METHOD_NAME_PREFIX) + 8
    assert facts.sentence()
