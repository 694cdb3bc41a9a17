from datetime import datetime, timezone

import pytest

from recovery_directory.shared.core.exceptions import ValidationError
from recovery_directory.shared.utils.helpers import (
    decode_cursor,
    encode_cursor,
    facility_slug,
    generate_slug,
    parse_city_state,
)
from recovery_directory.shared.utils.validators import (
    domains_match,
    is_valid_email,
    is_valid_website,
    validate_facility_data,
    validate_image_upload,
)

from tests.conftest import facility_payload


@pytest.mark.parametrize("email, website, expected", [
    ("staff@riverside.com", "https://www.riverside.com", True),
    ("Staff@RIVERSIDE.com", "riverside.com/about", True),
    ("admin@mail.riverside.com", "https://riverside.com", True),
    ("staff@gmail.com", "https://riverside.com", False),
    ("not-an-email", "https://riverside.com", False),
    ("staff@riverside.com", "", False),
    (None, "https://riverside.com", False),
])
def test_domains_match(email, website, expected):
    assert domains_match(email, website) is expected


def test_domains_match_compares_only_last_two_labels():
    # Not public-suffix aware: two different .co.uk sites compare equal.
    assert domains_match("a@alpha.co.uk", "https://beta.co.uk")


def test_email_and_website_shapes():
    assert is_valid_email("someone@example.org")
    assert not is_valid_email("someone@example")
    assert not is_valid_email("some one@example.org")
    assert is_valid_website("http://example.org")
    assert not is_valid_website("ftp://example.org")
    assert not is_valid_website("example.org")


def test_validate_facility_data_accepts_complete_payload():
    data = facility_payload(city="Austin", state="TX")
    result = validate_facility_data(data)
    assert result.is_valid
    assert result.errors == []


def test_validate_facility_data_collects_every_problem():
    result = validate_facility_data({
        "name": " ",
        "email": "bad",
        "website": "nope",
        "coordinates": {"lat": 120, "lng": 0},
    })
    assert not result.is_valid
    assert "Name is required" in result.errors
    assert "Phone is required" in result.errors
    assert "Email is invalid" in result.errors
    assert "Website must be an http(s) URL" in result.errors
    assert "Coordinates are out of range" in result.errors


def test_validate_image_upload():
    assert validate_image_upload("image/png", 10, 100).is_valid
    assert not validate_image_upload("application/pdf", 10, 100).is_valid
    assert not validate_image_upload("image/png", 0, 100).is_valid
    assert not validate_image_upload("image/png", 101, 100).is_valid


def test_slugs():
    assert generate_slug("Hope & Healing Center!") == "hope-healing-center"
    assert facility_slug("Riverside Recovery", "Austin, TX") == "riverside-recovery-austin-tx"
    assert len(generate_slug("x" * 80)) == 50


def test_parse_city_state():
    assert parse_city_state("Austin, TX") == ("Austin", "TX")
    assert parse_city_state("Austin") == ("Austin", "")
    assert parse_city_state(None) == ("", "")


def test_cursor_round_trip_and_rejects_garbage():
    created = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)
    assert decode_cursor(encode_cursor(created, "abc")) == (created, "abc")
    with pytest.raises(ValidationError):
        decode_cursor("not-a-cursor")
