import pytest

from conftest import POWER_UP
from validation import validate_book

UPDATE = {key: value for key, value in POWER_UP.items() if key != "isbn"}


def test_valid_create_returns_payload_unchanged():
    result = validate_book(POWER_UP, "create")
    assert result.valid
    assert result.data is POWER_UP
    assert result.errors == []


def test_valid_update():
    result = validate_book(UPDATE, "update")
    assert result.valid
    assert result.data is UPDATE


@pytest.mark.parametrize("field", sorted(POWER_UP))
def test_create_missing_field(field):
    payload = {key: value for key, value in POWER_UP.items() if key != field}
    result = validate_book(payload, "create")
    assert not result.valid
    assert result.data is None
    assert result.errors == [f"{field}: Field required"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("year", "WRONG STRING TYPE"),
        ("year", "2017"),
        ("year", 2017.5),
        ("pages", True),
        ("pages", 0),
        ("pages", -3),
        ("pages", 2**31),
        ("year", 10**20),
        ("year", -(2**31) - 1),
        ("title", 12),
        ("isbn", 691161518),
        ("amazon_url", None),
    ],
)
def test_create_bad_value(field, value):
    result = validate_book({**POWER_UP, field: value}, "create")
    assert not result.valid
    assert len(result.errors) == 1
    assert result.errors[0].startswith(f"{field}: ")


def test_update_rejects_isbn():
    result = validate_book({**UPDATE, "isbn": POWER_UP["isbn"]}, "update")
    assert not result.valid
    assert result.errors == ["isbn: field is not allowed"]


def test_update_rejects_isbn_alongside_other_errors():
    result = validate_book({"isbn": "x", "year": "soon"}, "update")
    assert not result.valid
    assert "isbn: field is not allowed" in result.errors
    assert "year: Input should be a valid integer" in result.errors


def test_unknown_field_is_rejected():
    result = validate_book({**POWER_UP, "rating": 5}, "create")
    assert result.errors == ["rating: field is not allowed"]


@pytest.mark.parametrize("payload", [None, [], "book", 3])
def test_non_object_payload(payload):
    result = validate_book(payload, "create")
    assert not result.valid
    assert len(result.errors) == 1
    assert result.errors[0].startswith("body: ")


def test_errors_follow_schema_order():
    result = validate_book({}, "create")
    fields = [message.split(":", 1)[0] for message in result.errors]
    assert fields == [
        "amazon_url", "author", "language", "pages", "publisher", "title", "year", "isbn",
    ]


def test_integer_bounds_accepted():
    result = validate_book({**POWER_UP, "pages": 2**31 - 1, "year": -(2**31)}, "create")
    assert result.valid
