import pytest

from storefront._errors import ValidationError
from storefront.gateway import (
    MAX_VALUE_LENGTH,
    REQUIRED_KEYS,
    CheckoutMetadata,
    build_session_request,
    cancel_url,
    decode,
    encode,
    line_item_label,
    success_url,
)
from storefront.config import Settings


def _meta(**overrides: object) -> CheckoutMetadata:
    fields: dict[str, object] = {
        "product_id": "64b000000000000000000001",
        "is_custom_product": False,
        "quantity": 2,
        "color": "Black",
        "size": "M",
        "custom_text": "Hello",
    }
    return CheckoutMetadata(**(fields | overrides))  # type: ignore[arg-type]


def test_encode_writes_flat_strings() -> None:
    bag = encode(_meta(customer_name="Ada", phone="555", address="1 Main St"))
    assert bag["v"] == "1"
    assert bag["productId"] == "64b000000000000000000001"
    assert bag["isCustomProduct"] == "false"
    assert bag["quantity"] == "2"
    assert bag["hasDesignImage"] == "false"
    assert bag["userId"] == "Ada"
    assert "designImageId" not in bag
    assert "coupon" not in bag
    assert all(isinstance(v, str) for v in bag.values())


def test_design_image_is_a_reference() -> None:
    bag = encode(_meta(is_custom_product=True, design_image_id="img_42"))
    assert bag["hasDesignImage"] == "true"
    assert bag["designImageId"] == "img_42"


def test_decode_restores_selection() -> None:
    meta = _meta(coupon="SAVE20", discount_percentage="20.0", final_price="40.00")
    decoded = decode(encode(meta))
    assert decoded.complete
    assert decoded.version == "1"
    assert decoded.metadata == meta


def test_missing_required_keys_reported() -> None:
    decoded = decode({"color": "Red"})
    assert decoded.missing == REQUIRED_KEYS
    assert not decoded.complete
    assert decoded.metadata.quantity == 1
    assert decoded.metadata.color == "Red"


def test_legacy_bag_without_version() -> None:
    decoded = decode({"productId": "abc", "isCustomProduct": "true", "quantity": "3"})
    assert decoded.complete
    assert decoded.version is None
    assert decoded.metadata.is_custom_product
    assert decoded.metadata.quantity == 3


@pytest.mark.parametrize(
    ("bag", "key"),
    [
        ({"productId": "p", "isCustomProduct": "yes", "quantity": "1"}, "isCustomProduct"),
        ({"productId": "p", "isCustomProduct": "false", "quantity": "two"}, "quantity"),
        ({"productId": "p", "isCustomProduct": "false", "quantity": "0"}, "quantity"),
        (
            {"productId": "p", "isCustomProduct": "true", "quantity": "1", "hasDesignImage": "true"},
            "hasDesignImage",
        ),
    ],
)
def test_malformed_values_reported(bag: dict[str, str], key: str) -> None:
    decoded = decode(bag)
    assert key in decoded.malformed
    assert decoded.metadata.quantity >= 1


def test_value_length_cap() -> None:
    encode(_meta(custom_text="x" * MAX_VALUE_LENGTH))
    with pytest.raises(ValidationError) as info:
        encode(_meta(custom_text="x" * (MAX_VALUE_LENGTH + 1)))
    assert info.value.code == "METADATA_TOO_LONG"


@pytest.mark.parametrize(
    ("color", "size", "label"),
    [
        ("Black", "M", "Tee (Black - M)"),
        ("Black", "", "Tee (Black)"),
        ("", "M", "Tee"),
        ("", "", "Tee"),
        (None, None, "Tee"),
    ],
)
def test_line_item_label(color: str | None, size: str | None, label: str) -> None:
    assert line_item_label("Tee", color, size) == label


def test_redirect_targets() -> None:
    assert success_url("https://shop.test/") == (
        "https://shop.test/success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert cancel_url("https://shop.test", "p1") == "https://shop.test/product/p1"


def test_session_request_uses_settings() -> None:
    settings = Settings(public_base_url="https://shop.test", currency="eur")
    request = build_session_request(
        settings,
        product_id="p1",
        label="Tee (Black)",
        unit_amount=2000,
        quantity=2,
        customer_email="a@b.co",
        metadata={"productId": "p1"},
    )
    assert request.line_item.currency == "eur"
    assert request.line_item.unit_amount == 2000
    assert request.cancel_url.endswith("/product/p1")
    assert request.allowed_countries == ("US",)
