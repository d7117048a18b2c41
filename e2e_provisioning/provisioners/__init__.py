# -*- coding: utf-8 -*-
"""Entity provisioners."""

from .base import BaseProvisioner
from .contact_methods import ContactMethodProvisioner
from .notification_rules import NotificationRuleProvisioner, Resolution
from .users import UserProvisioner

__all__ = [
    "BaseProvisioner",
    "UserProvisioner",
    "ContactMethodProvisioner",
    "NotificationRuleProvisioner",
    "Resolution",
]
