# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/facts.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Random fact synthesis for provisioning defaults.

Every value is fresh on each call. Phone numbers come from a fixed test pool
(``+1763`` followed by a 7-digit suffix between 3000000 and 3999999) so they are
always well-formed and easy to recognise in backend logs.
"""

# Standard
import string
from typing import Optional, Sequence, TypeVar
import uuid

# Third-Party
from faker import Faker

T = TypeVar("T")

PHONE_PREFIX = "+1763"
PHONE_SUFFIX_MIN = 3000000
PHONE_SUFFIX_MAX = 3999999

DELAY_MINUTES_MIN = 0
DELAY_MINUTES_MAX = 15

CONTACT_METHOD_NAME_PREFIX = "SM CM "
USER_NAME_LENGTH = 12


class FactSynthesizer:
    """Produces plausible default values backed by Faker.

    Args:
        faker: Optional Faker instance to draw from.
        seed: Optional seed applied to this instance only, for reproducible runs.
            Identifiers from ``guid()`` stay unique regardless of the seed.
    """

    def __init__(self, faker: Optional[Faker] = None, seed: Optional[int] = None):
        self.faker = faker or Faker()
        if seed is not None:
            self.faker.seed_instance(seed)

    def word(self, length: Optional[int] = None) -> str:
        """Return a lowercase word, exactly ``length`` letters long when given."""
        if length is None:
            return self.faker.word().lower()
        if length < 1:
            raise ValueError(f"word length must be positive, got {length}")
        return self.faker.lexify("?" * length, letters=string.ascii_lowercase)

    def sentence(self) -> str:
        return self.faker.sentence()

    def integer(self, min: int, max: int) -> int:  # pylint: disable=redefined-builtin
        """Return an integer in the inclusive range [min, max].

        Raises:
            ValueError: If the range is empty.
        """
        if min > max:
            raise ValueError(f"empty integer range [{min}, {max}]")
        return self.faker.random_int(min=min, max=max)

    def guid(self) -> str:
        return str(uuid.uuid4())

    def email(self) -> str:
        """Return a syntactically valid address on a reserved example domain."""
        local = f"{self.faker.user_name()}.{self.word(length=8)}"
        return f"{local}@{self.faker.safe_domain_name()}"

    def pick_one(self, choices: Sequence[T]) -> T:
        if not choices:
            raise ValueError("cannot pick from an empty sequence")
        return self.faker.random_element(choices)

    def phone_number(self) -> str:
        return PHONE_PREFIX + str(self.integer(PHONE_SUFFIX_MIN, PHONE_SUFFIX_MAX))

    def user_name(self) -> str:
        return self.word(length=USER_NAME_LENGTH)

    def contact_method_name(self) -> str:
        return CONTACT_METHOD_NAME_PREFIX + self.word(length=8)

    def delay_minutes(self) -> int:
        return self.integer(DELAY_MINUTES_MIN, DELAY_MINUTES_MAX)
