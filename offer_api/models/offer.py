# offer_api/models/offer.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict


@dataclass
class Offer:
    """A promotional reward definition with eligibility criteria and a ranking outcome.

    ``enabled_for`` maps user id to an explicit flag; a missing user is treated
    as disabled. ``min_milestone`` is carried for milestone rewards but is not
    part of eligibility.
    """

    id: str
    name: str = ""
    description: str = ""
    reward_type: str = "cashback"
    outcome: float = 0.0
    min_amount: int = 0
    min_milestone: int = 0
    details: str = ""
    merchant_category: str = ""
    enabled_for: Dict[str, bool] = field(default_factory=dict)

    def enable_for(self, user_id: str) -> None:
        self.enabled_for[user_id] = True

    def disable_for(self, user_id: str) -> None:
        self.enabled_for[user_id] = False

    def is_enabled_for(self, user_id: str) -> bool:
        return self.enabled_for.get(user_id, False)

    def copy(self) -> "Offer":
        return replace(self, enabled_for=dict(self.enabled_for))
