import pytest

from app.models import UNKNOWN, UNKNOWN_LOCATION
from app.services.location_resolver import LocationResolver


def test_code_table_wins_over_embedded_facility_name():
    record = {
        "eventLocation": {
            "UNLocationCode": "SAJED",
            "locationName": "Red Sea Gateway Terminal",
            "address": {"city": "Jiddah"},
        }
    }
    location = LocationResolver.resolve(record)

    assert location.name == "Jeddah"
    assert location.city == "Jeddah"
    assert location.country == "Saudi Arabia"
    assert location.code == "SAJED"


def test_code_lookup_is_case_insensitive_and_reads_transport_call():
    location = LocationResolver.resolve({"transportCall": {"UNLocationCode": "nlrtm"}})
    assert location.name == "Rotterdam"


def test_structured_city_when_code_unmapped():
    record = {"eventLocation": {"UNLocationCode": "XXABC", "address": {"city": "Springfield", "country": "US"}}}
    location = LocationResolver.resolve(record)

    assert location.name == "Springfield"
    assert location.country == "US"
    assert location.code == "XXABC"


def test_facility_name_as_last_resort():
    record = {"transportCall": {"location": {"locationName": "APM Terminals Maasvlakte II"}}}
    location = LocationResolver.resolve(record)

    assert location.name == "APM Terminals Maasvlakte II"
    assert location.city == UNKNOWN
    assert location.country == UNKNOWN


def test_unmapped_code_only_keeps_code():
    location = LocationResolver.resolve({"eventLocation": {"UNLocationCode": "ZZZZZ"}})
    assert location.name == UNKNOWN
    assert location.code == "ZZZZZ"


@pytest.mark.parametrize(
    "record",
    [
        {},
        None,
        "text",
        [],
        {"eventLocation": "SAJED"},
        {"eventLocation": {"UNLocationCode": 123, "address": ["city"]}},
        {"transportCall": {"location": None, "vessel": {}}},
    ],
)
def test_resolver_is_total(record):
    location = LocationResolver.resolve(record)
    assert location == UNKNOWN_LOCATION
    assert location.name == location.city == location.country == UNKNOWN
    assert not location.is_known
