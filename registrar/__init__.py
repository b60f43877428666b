"""Registrar.

Academic enrollment rule engine: decides whether a student may register
for or withdraw from a course offering and enforces credit-load policy.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
