# -*- coding: utf-8 -*-
"""Location: ./e2e_provisioning/schemas.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Provisioning Pydantic Schemas.
This module provides Pydantic models for the records returned by the
provisioners and for the partial specifications callers pass in.

The schemas support:
- User profiles (the active test subject included)
- Contact methods owned by a user
- Notification rules pointing at a contact method

Wire names are camelCase (``userID``, ``contactMethodID``, ``delayMinutes``);
Python attributes are snake_case. Use ``model_dump(by_alias=True)`` to get the
wire shape back.
"""

# Standard
from enum import Enum
from typing import Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class UserRole(str, Enum):
    """Roles a user profile may hold."""

    USER = "user"
    ADMIN = "admin"


class ContactMethodType(str, Enum):
    """Supported contact method channels."""

    SMS = "SMS"
    VOICE = "VOICE"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class _Record(BaseModel):
    """Snapshot of remote state. Frozen once normalized."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, use_enum_values=True, validate_default=True, extra="ignore")


class Profile(_Record):
    """A user profile."""

    id: str = Field(..., min_length=1)
    name: str
    email: str
    role: UserRole = UserRole.USER


class ContactMethod(_Record):
    """A contact method belonging to exactly one user."""

    id: str = Field(..., min_length=1)
    user_id: Optional[str] = Field(default=None, alias="userID")
    name: str
    type: ContactMethodType
    value: str


class NotificationRule(_Record):
    """A notification rule with its embedded contact method snapshot."""

    id: str = Field(..., min_length=1)
    user_id: Optional[str] = Field(default=None, alias="userID")
    contact_method_id: str = Field(..., alias="contactMethodID")
    contact_method: ContactMethod = Field(..., alias="contactMethod")
    delay_minutes: int = Field(..., ge=0, alias="delayMinutes")


# ---------------------------------------------------------------------------
# Partial specifications
# ---------------------------------------------------------------------------


class _Options(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, extra="forbid")


class UserOptions(_Options):
    """Fields a caller may pin when creating a user."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None


class ContactMethodOptions(_Options):
    """Fields a caller may pin when adding a contact method."""

    user_id: Optional[str] = Field(default=None, alias="userID")
    name: Optional[str] = None
    type: Optional[ContactMethodType] = None
    value: Optional[str] = None


class NotificationRuleOptions(_Options):
    """Fields a caller may pin when adding a notification rule.

    ``contact_method`` seeds the contact method created when
    ``contact_method_id`` is missing; it is ignored otherwise.
    """

    user_id: Optional[str] = Field(default=None, alias="userID")
    delay_minutes: Optional[int] = Field(default=None, ge=0, alias="delayMinutes")
    contact_method_id: Optional[str] = Field(default=None, alias="contactMethodID")
    contact_method: Optional[ContactMethodOptions] = Field(default=None, alias="contactMethod")
