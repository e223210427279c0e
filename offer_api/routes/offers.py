# offer_api/routes/offers.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from offer_api.core.exceptions import OfferNotFoundError
from offer_api.core.logging import get_structlog_logger
from offer_api.schemas.common import ErrorResponse
from offer_api.schemas.offer import EnablementResponse, OfferCreate, OfferResponse
from offer_api.services.offer_store import OfferStore, get_offer_store

logger = get_structlog_logger(__name__)

router = APIRouter(tags=["offers"])


@router.post(
    "/create-offer",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_offer(
    offer_data: OfferCreate,
    store: OfferStore = Depends(get_offer_store),
):
    """Create an offer, replacing any existing offer with the same id."""
    offer, replaced = store.put(offer_data.to_domain())

    logger.info(
        "offer.created",
        offer_id=offer.id,
        reward_type=offer.reward_type,
        merchant_category=offer.merchant_category,
        replaced=replaced,
    )

    return OfferResponse.from_domain(offer)


@router.post(
    "/enable/{offer_id}/{user_id}",
    response_model=EnablementResponse,
    responses={404: {"model": ErrorResponse}},
)
def enable_offer(
    offer_id: str,
    user_id: str,
    store: OfferStore = Depends(get_offer_store),
):
    """Enable an offer for a user."""
    store.enable_for(offer_id, user_id)

    logger.info("offer.enabled", offer_id=offer_id, user_id=user_id)

    return EnablementResponse(
        offer_id=offer_id,
        user_id=user_id,
        enabled=True,
        message=f"Offer '{offer_id}' enabled for user '{user_id}'",
    )


@router.post(
    "/disable/{offer_id}/{user_id}",
    response_model=EnablementResponse,
    responses={404: {"model": ErrorResponse}},
)
def disable_offer(
    offer_id: str,
    user_id: str,
    store: OfferStore = Depends(get_offer_store),
):
    """Disable an offer for a user."""
    store.disable_for(offer_id, user_id)

    logger.info("offer.disabled", offer_id=offer_id, user_id=user_id)

    return EnablementResponse(
        offer_id=offer_id,
        user_id=user_id,
        enabled=False,
        message=f"Offer '{offer_id}' disabled for user '{user_id}'",
    )


@router.get("/offers", response_model=List[OfferResponse])
def list_offers(store: OfferStore = Depends(get_offer_store)):
    """List every offer, enablement map included."""
    offers = store.all()

    logger.info("offers.list", count=len(offers))

    return [OfferResponse.from_domain(offer) for offer in offers]


@router.get(
    "/offers/{offer_id}",
    response_model=OfferResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_offer(offer_id: str, store: OfferStore = Depends(get_offer_store)):
    offer = store.get(offer_id)
    if offer is None:
        raise OfferNotFoundError(offer_id)
    return OfferResponse.from_domain(offer)
