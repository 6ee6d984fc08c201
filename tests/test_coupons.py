import pytest
from kungfu import Error, Ok

from storefront import coupons as Cp
from storefront._errors import InvalidIdentifier, MissingField, NotFoundError, ValidationError
from storefront.store import Collection, MemoryStore

from tests.conftest import FailingStore


# ═══════════════════════════════════════════════════════════════════════════════
# validate
# ═══════════════════════════════════════════════════════════════════════════════

async def test_accepted_code_is_normalized(coupons: MemoryStore) -> None:
    verdict = await Cp.validate(coupons, "  save20 ")
    assert verdict == Cp.Accepted("SAVE20", 20.0, "20% off")


@pytest.mark.parametrize(
    ("code", "reason"),
    [(None, "absent"), ("   ", "absent"), ("NOPE", "not_found"), ("old50", "inactive")],
)
async def test_rejections_never_raise(coupons: MemoryStore, code: str | None, reason: str) -> None:
    verdict = await Cp.validate(coupons, code)
    assert isinstance(verdict, Cp.Rejected)
    assert verdict.reason == reason
    assert verdict.discount_percentage == 0.0


async def test_unreachable_store_rejects() -> None:
    verdict = await Cp.validate(FailingStore(), "SAVE20")
    assert verdict == Cp.Rejected("SAVE20", "unavailable")


@pytest.mark.parametrize("stored", ["abc", 150, -5, 0, None, float("inf")])
async def test_unusable_stored_discount_rejects(store: MemoryStore, stored: object) -> None:
    await store.insert_one(
        Collection.COUPONS, {"code": "ODD", "discountPercentage": stored, "isActive": True}
    )
    verdict = await Cp.validate(store, "odd")
    assert verdict == Cp.Rejected("ODD", "invalid")


async def test_unreadable_discount_lists_as_zero(store: MemoryStore) -> None:
    await store.insert_one(
        Collection.COUPONS, {"code": "ODD", "discountPercentage": "abc", "isActive": True}
    )
    [coupon] = (await Cp.list_coupons(store)).unwrap()
    assert coupon.discount_percentage == 0.0


async def test_activation_change_is_seen_immediately(coupons: MemoryStore) -> None:
    assert isinstance(await Cp.validate(coupons, "SAVE20"), Cp.Accepted)
    await coupons.update_one(Collection.COUPONS, {"code": "SAVE20"}, {"isActive": False})
    assert isinstance(await Cp.validate(coupons, "SAVE20"), Cp.Rejected)


# ═══════════════════════════════════════════════════════════════════════════════
# administration
# ═══════════════════════════════════════════════════════════════════════════════

async def test_create_then_list_newest_first(store: MemoryStore) -> None:
    first = (await Cp.create_coupon(store, "first", 10)).unwrap()
    second = (await Cp.create_coupon(store, " second ", 15, "spring")).unwrap()
    assert second.code == "SECOND"
    assert second.description == "spring"
    assert second.is_active

    listed = (await Cp.list_coupons(store)).unwrap()
    assert [c.id for c in listed] == [second.id, first.id]


async def test_created_coupon_validates(store: MemoryStore) -> None:
    await Cp.create_coupon(store, "welcome", 5)
    assert await Cp.validate(store, "WELCOME") == Cp.Accepted("WELCOME", 5.0, "")


async def test_duplicate_code_rejected(coupons: MemoryStore) -> None:
    match await Cp.create_coupon(coupons, "save20", 10):
        case Error(ValidationError() as e):
            assert e.message == "Coupon code already exists"
            assert e.code == "DUPLICATE_CODE"
        case other:
            raise AssertionError(other)


async def test_missing_fields_listed(store: MemoryStore) -> None:
    match await Cp.create_coupon(store, " ", None):
        case Error(MissingField() as e):
            assert e.fields == ("code", "discountPercentage")
        case other:
            raise AssertionError(other)


@pytest.mark.parametrize("pct", [0, 100.5, -5])
async def test_discount_range(store: MemoryStore, pct: float) -> None:
    result = await Cp.create_coupon(store, "X", pct)
    assert isinstance(result, Error)
    assert result.error.status == 400


async def test_toggle_and_delete(store: MemoryStore) -> None:
    coupon = (await Cp.create_coupon(store, "flip", 30)).unwrap()

    assert (await Cp.set_coupon_active(store, coupon.id, False)) == Ok(None)
    assert isinstance(await Cp.validate(store, "FLIP"), Cp.Rejected)

    assert (await Cp.delete_coupon(store, coupon.id)) == Ok(None)
    assert (await Cp.list_coupons(store)).unwrap() == []


async def test_unknown_and_invalid_ids(store: MemoryStore) -> None:
    missing = "65a000000000000000000009"
    match await Cp.set_coupon_active(store, missing, True):
        case Error(NotFoundError() as e):
            assert e.message == "Coupon not found"
        case other:
            raise AssertionError(other)
    match await Cp.delete_coupon(store, "bogus"):
        case Error(InvalidIdentifier() as e):
            assert e.message == "Invalid coupon ID"
        case other:
            raise AssertionError(other)


async def test_toggle_requires_a_flag(store: MemoryStore) -> None:
    coupon = (await Cp.create_coupon(store, "flip", 30)).unwrap()
    match await Cp.set_coupon_active(store, coupon.id, None):
        case Error(MissingField() as e):
            assert e.fields == ("isActive",)
        case other:
            raise AssertionError(other)
