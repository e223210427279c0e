# offer_api/routes/transactions.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from offer_api.core.exceptions import NoApplicableOfferError
from offer_api.schemas.common import ErrorResponse
from offer_api.schemas.offer import OfferResponse
from offer_api.schemas.transaction import TransactionIn, TransactionResponse
from offer_api.services.offer_store import OfferStore, get_offer_store
from offer_api.services.transactions import apply_best_offer

router = APIRouter(tags=["transactions"])


@router.post(
    "/create-transaction",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse, "description": "No applicable offer"}},
)
def create_transaction(
    body: TransactionIn,
    store: OfferStore = Depends(get_offer_store),
) -> TransactionResponse:
    """Apply the best offer to a purchase transaction."""
    selection = apply_best_offer(store, body.to_domain())

    if not selection.applied:
        raise NoApplicableOfferError(body.txn_id)

    return TransactionResponse(
        txn_id=body.txn_id,
        applied_offer=OfferResponse.from_domain(selection.offer),
        eligible_offer_ids=[offer.id for offer in selection.candidates],
    )
