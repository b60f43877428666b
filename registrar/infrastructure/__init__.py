# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Infrastructure adapters for Registrar.

Concrete implementations of the enrollment ports:
    database: SQLAlchemy-backed student directory and course catalog.
    memory: Thread-safe in-memory adapters for development and tests.
    notifications: SMTP email delivery.
"""
