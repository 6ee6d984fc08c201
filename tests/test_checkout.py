from datetime import datetime

import pytest
from kungfu import Error, Ok

from storefront import checkout as Co
from storefront._errors import (
    InvalidIdentifier,
    InvalidQuantity,
    MissingField,
    ProductNotFound,
    UpstreamError,
)
from storefront.config import Settings
from storefront.gateway import MemoryGateway
from storefront.store import Collection, MemoryStore

from tests.conftest import CUSTOM_ID, TEE_ID, FailingStore

CONTACT = Co.Contact(name="Ada", email="ada@example.com", phone="555-0100", address="1 Main St")


def _request(product_id: str = TEE_ID, **selection: object) -> Co.CheckoutRequest:
    coupon = selection.pop("coupon_code", None)
    custom = bool(selection.pop("is_custom_product", False))
    return Co.CheckoutRequest(
        product_id=product_id,
        is_custom_product=custom,
        contact=CONTACT,
        selection=Co.Selection(**selection),  # type: ignore[arg-type]
        coupon_code=coupon,  # type: ignore[arg-type]
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Delivery channel
# ═══════════════════════════════════════════════════════════════════════════════

async def test_delivery_order_persisted_pending(catalog: MemoryStore, settings: Settings) -> None:
    request = _request(color="Black", size="M", quantity=2)
    match await Co.create_delivery_order(request, Co.DeliveryPreferences(), store=catalog, settings=settings):
        case Ok(receipt):
            assert receipt.status == "success"
        case other:
            raise AssertionError(other)

    [doc] = await catalog.find(Collection.ORDERS, {})
    assert doc["_id"] == receipt.id
    assert doc["amount_total"] == 5000
    assert doc["status"] == "pending"
    assert doc["paymentMethod"] == "delivery"
    assert doc["preferredMethod"] == "cash"
    assert doc["quantity"] == 2
    assert doc["selectedColor"] == "Black"
    assert doc["customer"] == {
        "name": "Ada",
        "email": "ada@example.com",
        "phone": "555-0100",
        "address": "1 Main St",
    }
    assert doc["product"]["name"] == "Classic Tee"
    assert doc["product"]["category"] == "Shirts"
    assert isinstance(doc["created"], datetime)
    assert "couponCode" not in doc


async def test_delivery_order_with_coupon(catalog: MemoryStore, coupons: MemoryStore, settings: Settings) -> None:
    request = _request(quantity=2, coupon_code="save20")
    preferences = Co.DeliveryPreferences(preferred_method="card", additional_notes="ring twice")
    (await Co.create_delivery_order(request, preferences, store=catalog, settings=settings)).unwrap()

    [doc] = await catalog.find(Collection.ORDERS, {})
    assert doc["amount_total"] == 4000
    assert doc["couponCode"] == "SAVE20"
    assert doc["discountPercentage"] == 20.0
    assert doc["originalPrice"] == 50.0
    assert doc["finalPrice"] == 40.0
    assert doc["preferredMethod"] == "card"
    assert doc["additionalNotes"] == "ring twice"


async def test_delivery_requires_full_contact(catalog: MemoryStore, settings: Settings) -> None:
    request = Co.CheckoutRequest(product_id=TEE_ID, contact=Co.Contact(email="a@b.co"))
    match await Co.create_delivery_order(request, Co.DeliveryPreferences(), store=catalog, settings=settings):
        case Error(MissingField() as e):
            assert e.fields == ("name", "phone", "address")
            assert e.status == 400
        case other:
            raise AssertionError(other)
    assert await catalog.find(Collection.ORDERS, {}) == []


async def test_custom_product_design_image(catalog: MemoryStore, settings: Settings) -> None:
    request = _request(CUSTOM_ID, is_custom_product=True, custom_text="Team Ada")
    (await Co.create_delivery_order(request, Co.DeliveryPreferences(), store=catalog, settings=settings)).unwrap()

    [doc] = await catalog.find(Collection.ORDERS, {})
    assert doc["product"]["isCustomProduct"] is True
    assert doc["product"]["customText"] == "Team Ada"
    assert doc["product"]["customImage"] == "hoodie-base.png"
    assert doc["product"]["designImageId"] == "img_final_1"
    assert doc["amount_total"] == 4000


# ═══════════════════════════════════════════════════════════════════════════════
# Gateway channel
# ═══════════════════════════════════════════════════════════════════════════════

async def test_gateway_session_with_coupon(
    catalog: MemoryStore,
    coupons: MemoryStore,
    gateway: MemoryGateway,
    settings: Settings,
) -> None:
    request = _request(color="Black", size="M", quantity=2, coupon_code="SAVE20")
    handle = (
        await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings)
    ).unwrap()

    [sent] = gateway.requests
    assert handle.id == "cs_test_1"
    assert sent.line_item.unit_amount == 2000
    assert sent.line_item.quantity == 2
    assert sent.line_item.name == "Classic Tee (Black - M)"
    assert sent.metadata["quantity"] == "2"
    assert sent.metadata["productId"] == TEE_ID
    assert sent.metadata["isCustomProduct"] == "false"
    assert sent.metadata["coupon"] == "SAVE20"
    assert sent.metadata["originalPrice"] == "50.00"
    assert sent.metadata["finalPrice"] == "40.00"
    assert sent.metadata["userId"] == "Ada"
    assert sent.customer_email == "ada@example.com"
    assert sent.success_url == "https://shop.test/success?session_id={CHECKOUT_SESSION_ID}"
    assert sent.cancel_url == f"https://shop.test/product/{TEE_ID}"
    # nothing is written locally for this channel
    assert await catalog.find(Collection.ORDERS, {}) == []


async def test_rejected_coupon_charges_full_price(
    catalog: MemoryStore,
    coupons: MemoryStore,
    gateway: MemoryGateway,
    settings: Settings,
) -> None:
    request = _request(quantity=1, coupon_code="OLD50")
    (await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings)).unwrap()

    [sent] = gateway.requests
    assert sent.line_item.unit_amount == 2500
    assert "coupon" not in sent.metadata


async def test_custom_design_reference_in_metadata(
    catalog: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    request = _request(CUSTOM_ID, is_custom_product=True, custom_text="Hi")
    (await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings)).unwrap()

    [sent] = gateway.requests
    assert sent.metadata["isCustomProduct"] == "true"
    assert sent.metadata["hasDesignImage"] == "true"
    assert sent.metadata["designImageId"] == "img_final_1"


async def test_gateway_requires_product_and_email(
    catalog: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    request = Co.CheckoutRequest(product_id="  ")
    match await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings):
        case Error(MissingField() as e):
            assert e.fields == ("productId", "email")
        case other:
            raise AssertionError(other)


@pytest.mark.parametrize("quantity", [0, -2, "abc", 1.5])
async def test_bad_quantity_rejected_before_any_write(
    catalog: MemoryStore, gateway: MemoryGateway, settings: Settings, quantity: object
) -> None:
    request = _request(quantity=quantity)
    result = await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings)
    assert isinstance(result, Error)
    assert isinstance(result.error, InvalidQuantity)
    assert gateway.requests == []

    result = await Co.create_delivery_order(request, Co.DeliveryPreferences(), store=catalog, settings=settings)
    assert isinstance(result.error, InvalidQuantity)
    assert await catalog.find(Collection.ORDERS, {}) == []


async def test_product_in_other_collection_not_found(
    catalog: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    request = _request(TEE_ID, is_custom_product=True)
    match await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings):
        case Error(ProductNotFound() as e):
            assert e.status == 404
        case other:
            raise AssertionError(other)
    assert gateway.requests == []


async def test_invalid_product_id(catalog: MemoryStore, gateway: MemoryGateway, settings: Settings) -> None:
    result = await Co.create_checkout_session(
        _request("123"), store=catalog, gateway=gateway, settings=settings
    )
    assert isinstance(result.error, InvalidIdentifier)


async def test_gateway_error_passes_through(
    catalog: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    gateway.fail_with = UpstreamError("Your card was declined", code="card_declined", status=402)
    match await Co.create_checkout_session(_request(), store=catalog, gateway=gateway, settings=settings):
        case Error(UpstreamError() as e):
            assert e.message == "Your card was declined"
            assert e.code == "card_declined"
            assert e.status == 402
        case other:
            raise AssertionError(other)


async def test_store_failure_aborts_delivery(settings: Settings) -> None:
    result = await Co.create_delivery_order(
        _request(), Co.DeliveryPreferences(), store=FailingStore(), settings=settings
    )
    assert isinstance(result.error, UpstreamError)
    assert result.error.status == 500


async def test_misconfigured_coupon_never_blocks_checkout(
    catalog: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    await catalog.insert_one(
        Collection.COUPONS, {"code": "HUGE", "discountPercentage": 150, "isActive": True}
    )
    request = _request(quantity=1, coupon_code="huge")
    (await Co.create_checkout_session(request, store=catalog, gateway=gateway, settings=settings)).unwrap()

    [sent] = gateway.requests
    assert sent.line_item.unit_amount == 2500
    assert "coupon" not in sent.metadata


async def test_final_price_records_the_charged_amount(
    store: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    pen_id = await store.insert_one(Collection.PRODUCTS, {"name": "Pen", "price": 9.99})
    await store.insert_one(
        Collection.COUPONS, {"code": "THIRD", "discountPercentage": 33, "isActive": True}
    )
    request = _request(pen_id, quantity=3, coupon_code="THIRD")
    (await Co.create_checkout_session(request, store=store, gateway=gateway, settings=settings)).unwrap()

    [sent] = gateway.requests
    # 9.99 * 0.67 = 6.6933 -> 669 per unit, billed 3 x 669
    assert sent.line_item.unit_amount * sent.line_item.quantity == 2007
    assert sent.metadata["finalPrice"] == "20.07"
    assert sent.metadata["originalPrice"] == "29.97"


async def test_unreadable_product_record_is_upstream(
    store: MemoryStore, gateway: MemoryGateway, settings: Settings
) -> None:
    broken_id = await store.insert_one(Collection.PRODUCTS, {"name": "Mystery", "price": "$25"})
    match await Co.create_checkout_session(
        _request(broken_id, quantity=1), store=store, gateway=gateway, settings=settings
    ):
        case Error(UpstreamError() as e):
            assert e.code == "MALFORMED_PRODUCT"
        case other:
            raise AssertionError(other)
    assert gateway.requests == []
