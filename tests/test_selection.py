from datetime import datetime, timezone

import pytest

from offer_api.models.offer import Offer
from offer_api.models.transaction import Transaction
from offer_api.services.eligibility import is_applicable
from offer_api.services.selection import rank_applicable_offers, select_best_offer
from offer_api.services.transactions import apply_best_offer


def make_txn(amount=150, customer_id="u1", merchant_category="grocery"):
    return Transaction(
        txn_id="t1",
        customer_id=customer_id,
        amount=amount,
        merchant_id="m1",
        merchant_category=merchant_category,
        post_entry_mode="chip",
        timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


def make_offer(offer_id, outcome, min_amount=100, category="grocery", users=("u1",), **kwargs):
    return Offer(
        id=offer_id,
        reward_type="cashback",
        outcome=outcome,
        min_amount=min_amount,
        merchant_category=category,
        enabled_for={user_id: True for user_id in users},
        **kwargs,
    )


@pytest.fixture
def scenario_offers():
    return [
        make_offer("A", outcome=5.0, min_amount=100),
        make_offer("B", outcome=8.0, min_amount=50),
    ]


def test_amount_at_threshold_is_applicable():
    offer = make_offer("A", outcome=5.0, min_amount=100)
    assert is_applicable(make_txn(amount=100), offer)
    assert not is_applicable(make_txn(amount=99), offer)


def test_category_must_match_exactly():
    offer = make_offer("A", outcome=5.0, category="grocery")
    assert not is_applicable(make_txn(merchant_category="Grocery"), offer)
    assert not is_applicable(make_txn(merchant_category="fuel"), offer)


def test_user_never_enabled_is_not_eligible():
    offer = make_offer("A", outcome=5.0, users=())
    assert not is_applicable(make_txn(), offer)


def test_enable_then_disable_is_not_eligible():
    offer = make_offer("A", outcome=5.0)
    offer.disable_for("u1")
    assert not is_applicable(make_txn(), offer)


def test_min_milestone_does_not_affect_eligibility():
    offer = make_offer("A", outcome=5.0, min_milestone=10_000)
    assert is_applicable(make_txn(), offer)


def test_best_offer_highest_outcome(scenario_offers):
    best = select_best_offer(make_txn(amount=120), scenario_offers)
    assert best.id == "B"


def test_best_offer_only_lower_threshold_applies(scenario_offers):
    best = select_best_offer(make_txn(amount=60), scenario_offers)
    assert best.id == "B"


def test_no_applicable_offer_returns_none(scenario_offers):
    assert select_best_offer(make_txn(amount=10), scenario_offers) is None
    assert select_best_offer(make_txn(), []) is None


@pytest.mark.parametrize("order", [["x", "y", "z"], ["z", "y", "x"], ["y", "z", "x"]])
def test_tie_break_prefers_lowest_id(order):
    offers = [make_offer(offer_id, outcome=7.0) for offer_id in order]

    assert select_best_offer(make_txn(), offers).id == "x"
    assert [o.id for o in rank_applicable_offers(make_txn(), offers)] == ["x", "y", "z"]


def test_adding_lower_outcome_offer_keeps_winner(scenario_offers):
    before = select_best_offer(make_txn(amount=120), scenario_offers)
    after = select_best_offer(
        make_txn(amount=120),
        scenario_offers + [make_offer("C", outcome=1.0)],
    )
    assert before.id == after.id == "B"


def test_adding_higher_outcome_offer_takes_over(scenario_offers):
    best = select_best_offer(
        make_txn(amount=120),
        scenario_offers + [make_offer("C", outcome=12.5)],
    )
    assert best.id == "C"


def test_rank_excludes_inapplicable_offers(scenario_offers):
    offers = scenario_offers + [make_offer("D", outcome=50.0, category="fuel")]
    ranked = rank_applicable_offers(make_txn(amount=120), offers)
    assert [offer.id for offer in ranked] == ["B", "A"]


def test_apply_best_offer_uses_store_snapshot(store, scenario_offers):
    for offer in scenario_offers:
        store.put(offer)

    selection = apply_best_offer(store, make_txn(amount=120))

    assert selection.applied
    assert selection.offer.id == "B"
    assert [offer.id for offer in selection.candidates] == ["B", "A"]


def test_apply_best_offer_without_match(store, scenario_offers):
    for offer in scenario_offers:
        store.put(offer)

    selection = apply_best_offer(store, make_txn(customer_id="stranger"))

    assert not selection.applied
    assert selection.offer is None
    assert selection.candidates == []


def test_apply_best_offer_matches_select_best_offer_on_tie(store):
    for offer_id in ("m", "c", "x"):
        store.put(make_offer(offer_id, outcome=6.0))
    txn = make_txn()

    selection = apply_best_offer(store, txn)

    assert selection.offer.id == select_best_offer(txn, store.all()).id == "c"
    assert selection.candidates[0].id == selection.offer.id
