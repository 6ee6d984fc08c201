from storefront.auth import AllowListPolicy, Caller, authorize
from storefront._errors import AuthorizationError
from storefront.config import Settings
from kungfu import Error, Ok


def test_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.public_base_url == "http://localhost:3000"
    assert settings.mongodb_database == "ecommerce"
    assert settings.admin_emails == frozenset()
    assert settings.allowed_shipping_countries == ("US",)
    assert settings.gateway_page_size == 100
    assert settings.lookup_timeout_seconds == 5.0


def test_from_env() -> None:
    settings = Settings.from_env(
        {
            "PUBLIC_BASE_URL": "https://shop.example/",
            "ADMIN_EMAILS": " Owner@Shop.example, ops@shop.example ,",
            "ALLOWED_SHIPPING_COUNTRIES": "us,ca",
            "CURRENCY": "EUR",
            "GATEWAY_PAGE_SIZE": "25",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.public_base_url == "https://shop.example"
    assert settings.admin_emails == frozenset({"owner@shop.example", "ops@shop.example"})
    assert settings.allowed_shipping_countries == ("CA", "US")
    assert settings.currency == "eur"
    assert settings.gateway_page_size == 25
    assert settings.log_level == "DEBUG"


def test_with_admins() -> None:
    assert Settings().with_admins("A@x.io").admin_emails == frozenset({"a@x.io"})


def test_allow_list_policy() -> None:
    policy = AllowListPolicy.from_settings(Settings().with_admins("owner@shop.test"))
    owner = Caller.from_headers({"X-User-Email": " Owner@Shop.test "})
    stranger = Caller.from_headers({"x-user-email": "eve@shop.test"})

    assert policy.is_admin(owner)
    assert not policy.is_admin(stranger)
    assert not policy.is_admin(Caller())
    assert authorize(policy, owner) == Ok(owner)
    match authorize(policy, stranger):
        case Error(AuthorizationError() as e):
            assert e.status == 403
        case other:
            raise AssertionError(other)


def test_custom_identity_header() -> None:
    policy = AllowListPolicy(frozenset({"a@b.co"}), header="x-forwarded-email")
    assert policy.is_admin(Caller.from_headers({"x-forwarded-email": "a@b.co"}))
    assert not policy.is_admin(Caller.from_headers({"x-user-email": "a@b.co"}))
