import threading

import pytest

from offer_api.core.exceptions import OfferNotFoundError
from offer_api.models.offer import Offer
from offer_api.services.offer_store import OfferStore, get_offer_store


def make_offer(offer_id="o1", **overrides):
    fields = {
        "id": offer_id,
        "name": "Grocery cashback",
        "reward_type": "cashback",
        "outcome": 5.0,
        "min_amount": 100,
        "merchant_category": "grocery",
    }
    fields.update(overrides)
    return Offer(**fields)


def test_put_then_get(store):
    store.put(make_offer())

    offer = store.get("o1")
    assert offer is not None
    assert offer.name == "Grocery cashback"
    assert len(store) == 1
    assert "o1" in store


def test_get_unknown_returns_none(store):
    assert store.get("missing") is None


def test_put_replaces_offer_wholesale(store):
    store.put(make_offer(outcome=5.0))
    store.enable_for("o1", "u1")

    store.put(make_offer(outcome=9.0, merchant_category="fuel"))

    offer = store.get("o1")
    assert offer.outcome == 9.0
    assert offer.merchant_category == "fuel"
    # the replacement carries its own enablement map
    assert offer.enabled_for == {}
    assert len(store) == 1


def test_put_rejects_empty_id(store):
    with pytest.raises(ValueError):
        store.put(make_offer(offer_id=""))


def test_returned_offers_are_copies(store):
    original = make_offer()
    store.put(original)
    original.enable_for("u1")

    fetched = store.get("o1")
    assert fetched.enabled_for == {}

    fetched.enable_for("u2")
    for snapshot in store.all():
        snapshot.outcome = 0.0
    assert store.get("o1").enabled_for == {}
    assert store.get("o1").outcome == 5.0


def test_all_is_ordered_by_id(store):
    for offer_id in ["c", "a", "b"]:
        store.put(make_offer(offer_id=offer_id))

    assert [offer.id for offer in store.all()] == ["a", "b", "c"]


def test_enable_then_disable(store):
    store.put(make_offer())

    enabled = store.enable_for("o1", "u1")
    assert enabled.enabled_for == {"u1": True}
    assert store.get("o1").is_enabled_for("u1")

    disabled = store.disable_for("o1", "u1")
    assert disabled.enabled_for == {"u1": False}
    assert not store.get("o1").is_enabled_for("u1")


def test_enable_is_idempotent(store):
    store.put(make_offer())
    store.enable_for("o1", "u1")
    store.enable_for("o1", "u1")

    assert store.get("o1").enabled_for == {"u1": True}


def test_disable_never_enabled_user_records_false(store):
    store.put(make_offer())

    store.disable_for("o1", "u9")

    assert store.get("o1").enabled_for == {"u9": False}


def test_enable_unknown_offer():
    store = OfferStore()
    with pytest.raises(OfferNotFoundError) as exc_info:
        store.enable_for("missing", "u1")
    assert exc_info.value.code == "offer_not_found"
    assert exc_info.value.status_code == 404
    assert exc_info.value.details == {"offer_id": "missing"}


def test_disable_unknown_offer_leaves_store_unchanged(store):
    store.put(make_offer())

    with pytest.raises(OfferNotFoundError):
        store.disable_for("missing", "u1")

    assert [offer.id for offer in store.all()] == ["o1"]
    assert store.get("o1").enabled_for == {}


def test_clear(store):
    store.put(make_offer())
    store.clear()
    assert len(store) == 0


def test_concurrent_enablement_is_not_lost(store):
    store.put(make_offer())
    users = [f"u{i}" for i in range(200)]
    errors = []

    def enable(batch):
        try:
            for user_id in batch:
                store.enable_for("o1", user_id)
                store.all()
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=enable, args=(users[i::4],)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    enabled_for = store.get("o1").enabled_for
    assert len(enabled_for) == len(users)
    assert all(enabled_for.values())


def test_get_offer_store_is_a_singleton():
    assert get_offer_store() is get_offer_store()


def test_concurrent_create_enable_and_evaluate(store):
    from datetime import datetime, timezone

    from offer_api.models.transaction import Transaction
    from offer_api.services.transactions import apply_best_offer

    txn = Transaction(
        txn_id="t1",
        customer_id="u1",
        amount=500,
        merchant_id="m1",
        merchant_category="grocery",
        post_entry_mode="chip",
        timestamp=datetime.now(timezone.utc),
    )
    errors = []

    def create():
        for i in range(100):
            store.put(make_offer(offer_id=f"o{i}", outcome=float(i)))

    def enable():
        for i in range(100):
            try:
                store.enable_for(f"o{i}", "u1")
            except OfferNotFoundError:
                pass

    def evaluate():
        for _ in range(100):
            apply_best_offer(store, txn)

    def run(target):
        try:
            target()
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=run, args=(fn,)) for fn in (create, enable, evaluate, evaluate)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert len(store) == 100


def test_put_reports_replacement(store):
    stored, replaced = store.put(make_offer())
    assert stored.id == "o1"
    assert replaced is False

    _, replaced = store.put(make_offer(outcome=9.0))
    assert replaced is True
