import pytest

from shop_personalization import (
    EVENT_WEIGHTS,
    CacheEntry,
    EventKind,
    PreferenceProfile,
    PriceBucket,
    Product,
    UserEvent,
    price_bucket_for,
)


@pytest.mark.parametrize(
    "price, bucket",
    [
        (0, PriceBucket.BUDGET),
        (999.99, PriceBucket.BUDGET),
        (1000, PriceBucket.MID),
        (4999, PriceBucket.MID),
        (5000, PriceBucket.PREMIUM),
        (19999, PriceBucket.PREMIUM),
        (20000, PriceBucket.LUXURY),
    ],
)
def test_price_bucket_thresholds(price, bucket):
    assert price_bucket_for(price) == bucket


def test_event_weights_are_fixed():
    assert EventKind.PURCHASE.weight == 10
    assert EventKind.CLICK.weight == 0.5
    assert len(EVENT_WEIGHTS) == len(EventKind)
    with pytest.raises(TypeError):
        EVENT_WEIGHTS[EventKind.VIEW] = 100


def test_event_kind_parse():
    assert EventKind.parse("add_to_cart") == EventKind.ADD_TO_CART
    assert EventKind.parse(EventKind.VIEW) == EventKind.VIEW
    with pytest.raises(ValueError):
        EventKind.parse("ADD_TO_CART")


def test_user_event_accepts_camel_case_aliases():
    event = UserEvent.from_payload("view", {"productId": 12, "priceRange": "budget"}, 5)

    assert event.product_id == "12"
    assert event.price_bucket() == PriceBucket.BUDGET
    assert event.to_dict() == {"type": "view", "timestamp": 5, "productId": "12", "priceRange": "budget"}


def test_user_event_is_immutable():
    event = UserEvent.from_payload("view", {}, 1)
    with pytest.raises(AttributeError):
        event.category = "robes"


def test_user_event_without_price_has_no_bucket():
    assert UserEvent.from_payload("search", {"category": "robes"}, 1).price_bucket() is None


def test_preference_profile_to_dict_uses_bucket_names():
    profile = PreferenceProfile(price_ranges={PriceBucket.PREMIUM: 3})
    assert profile.to_dict()["priceRanges"] == {"premium": 3}
    assert PreferenceProfile.from_dict(profile.to_dict()) == profile


def test_preference_profile_from_empty_data():
    assert PreferenceProfile.from_dict(None).is_empty()
    assert PreferenceProfile.from_dict({}).is_empty()


def test_product_normalizes_id_and_keeps_extra_fields():
    product = Product.from_dict({"id": 42, "price": 10, "name": "Robe", "image": "r.jpg"})

    assert product.id == "42"
    assert product.tags == ()
    assert product.extra == {"name": "Robe", "image": "r.jpg"}
    assert product.to_dict() == {"id": "42", "price": 10, "name": "Robe", "image": "r.jpg"}


def test_cache_entry_expiry_is_strict():
    entry = CacheEntry(value="v", expiry=100, timestamp=90)
    assert not entry.is_expired(100)
    assert entry.is_expired(101)


def test_product_is_hashable_and_tags_are_immutable():
    product = Product(id=1, tags=["coton", "ete"], extra={"name": "Robe"})

    assert product.tags == ("coton", "ete")
    assert product == Product.from_dict(product.to_dict())
    assert {product, Product.from_dict(product.to_dict())} == {product}


def test_user_event_query_round_trip():
    event = UserEvent.from_payload("search", {"query": "robe ete"}, 5)

    assert event.to_dict() == {"type": "search", "timestamp": 5, "query": "robe ete"}
    assert UserEvent.from_dict(event.to_dict()) == event
