# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""GPA-tiered credit policy."""

from __future__ import annotations

from registrar.core.config.settings import CreditPolicySettings
from registrar.domains.enrollment.ports import CreditPolicy


class TieredCreditPolicy(CreditPolicy):
    """Credit cap chosen from the highest GPA tier the student reaches.

    Attributes:
        tiers: (min_gpa, max_credits) pairs ordered by descending min_gpa.
        floor_credits: Cap for a GPA below every tier.
    """

    def __init__(
        self,
        tiers: list[tuple[float, int]],
        floor_credits: int,
    ) -> None:
        self.tiers = sorted(tiers, key=lambda tier: tier[0], reverse=True)
        self.floor_credits = floor_credits

    @classmethod
    def from_settings(cls, settings: CreditPolicySettings) -> TieredCreditPolicy:
        """Build the policy from configuration."""
        return cls(tiers=list(settings.tiers), floor_credits=settings.floor_credits)

    def calculate_max_credits(self, gpa: float) -> int:
        for min_gpa, max_credits in self.tiers:
            if gpa >= min_gpa:
                return max_credits
        return self.floor_credits
