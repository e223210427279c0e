# offer_api/schemas/offer.py
from __future__ import annotations

from dataclasses import asdict
from typing import Dict

from pydantic import Field, field_validator

from offer_api.core.config import settings
from offer_api.models.offer import Offer
from offer_api.schemas.common import CamelModel


class OfferCreate(CamelModel):
    id: str = Field(min_length=1, max_length=128)
    name: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=2000)
    reward_type: str = Field(min_length=1, max_length=32)
    outcome: float = Field(ge=0, allow_inf_nan=False)
    min_amount: int = Field(default=0, ge=0, strict=True)
    min_milestone: int = Field(default=0, ge=0, strict=True)
    details: str = Field(default="", max_length=5000)
    merchant_category: str = Field(min_length=1, max_length=64)
    enabled_for: Dict[str, bool] = Field(default_factory=dict)

    @field_validator("reward_type")
    def validate_reward_type(cls, v):
        kind = v.lower()
        allowed = settings.reward_types()
        if kind not in allowed:
            raise ValueError(f"reward_type must be one of {allowed}")
        return kind

    @field_validator("enabled_for")
    def validate_enabled_for(cls, v):
        if any(not user_id.strip() for user_id in v):
            raise ValueError("enabled_for keys must be non-empty user ids")
        return v

    def to_domain(self) -> Offer:
        return Offer(
            id=self.id,
            name=self.name,
            description=self.description,
            reward_type=self.reward_type,
            outcome=self.outcome,
            min_amount=self.min_amount,
            min_milestone=self.min_milestone,
            details=self.details,
            merchant_category=self.merchant_category,
            enabled_for=dict(self.enabled_for),
        )


class OfferResponse(CamelModel):
    id: str
    name: str
    description: str
    reward_type: str
    outcome: float
    min_amount: int
    min_milestone: int
    details: str
    merchant_category: str
    enabled_for: Dict[str, bool]

    @classmethod
    def from_domain(cls, offer: Offer) -> "OfferResponse":
        return cls(**asdict(offer))


class EnablementResponse(CamelModel):
    offer_id: str
    user_id: str
    enabled: bool
    message: str
