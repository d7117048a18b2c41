# -*- coding: utf-8 -*-
"""Test-fixture provisioning for end-to-end suites.

Creates users, contact methods and notification rules against a live backend,
resolving missing dependencies and synthesizing defaults so tests only state
the fields they care about.
"""

__version__ = "1.0.0"
