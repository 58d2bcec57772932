# tests/conftest.py
from datetime import datetime, timezone

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_equipment_event():
    def _make(reference="MSKU1000", code="GTIN", ts="2025-03-01T08:00:00Z", classifier="ACT",
              locode=None, iso="45G1", **extra):
        record = {
            "eventType": "EQUIPMENT",
            "equipmentEventTypeCode": code,
            "eventClassifierCode": classifier,
            "eventCreatedDateTime": ts,
            "equipmentReference": reference,
            "ISOEquipmentCode": iso,
        }
        if locode:
            record["eventLocation"] = {"UNLocationCode": locode}
        record.update(extra)
        return record

    return _make


@pytest.fixture
def make_transport_event():
    def _make(code="DEPA", ts="2025-03-02T10:00:00Z", classifier="ACT", locode="CNSHA",
              vessel="MAERSK ESSEN", voyage="512W", **extra):
        call = {"UNLocationCode": locode, "modeOfTransport": "VESSEL"}
        if vessel:
            call["vessel"] = {"vesselName": vessel}
            call["exportVoyageNumber"] = voyage
        record = {
            "eventType": "TRANSPORT",
            "transportEventTypeCode": code,
            "eventClassifierCode": classifier,
            "eventCreatedDateTime": ts,
            "transportCall": call,
        }
        record.update(extra)
        return record

    return _make


@pytest.fixture
def make_shipment_event():
    def _make(code="ISSU", ts="2025-02-25T09:00:00Z", document="245000001", **extra):
        record = {
            "eventType": "SHIPMENT",
            "shipmentEventTypeCode": code,
            "eventClassifierCode": "ACT",
            "eventCreatedDateTime": ts,
            "documentID": document,
            "documentTypeCode": "TRD",
        }
        record.update(extra)
        return record

    return _make


@pytest.fixture
def journey(make_equipment_event, make_transport_event, make_shipment_event):
    """
    Two containers out of Shanghai towards Jeddah, in feed order (not time order):
    the vessel has departed, arrival and discharge are still planned/estimated.
    """
    return [
        make_shipment_event(),
        make_equipment_event("MSKU1000", "GTOT", "2025-02-27T08:00:00Z", locode="CNSHA", emptyIndicatorCode="EMPTY"),
        make_equipment_event("MSKU1000", "GTIN", "2025-02-28T08:00:00Z", locode="CNSHA"),
        make_equipment_event("MSKU1000", "LOAD", "2025-03-01T08:00:00Z", locode="CNSHA",
                             transportCall={"modeOfTransport": "VESSEL"}),
        make_transport_event("DEPA", "2025-03-02T10:00:00Z", locode="CNSHA"),
        make_equipment_event("MSKU2000", "GTIN", "2025-02-28T12:00:00Z", locode="CNSHA", iso="22G1"),
        make_equipment_event("MSKU2000", "LOAD", "2025-03-01T06:00:00Z", locode="CNSHA", iso="22G1"),
        make_transport_event("ARRI", "2025-03-20T06:00:00Z", classifier="PLN", locode="SAJED"),
        make_equipment_event("MSKU1000", "DISC", "2025-03-21T06:00:00Z", classifier="EST", locode="SAJED"),
    ]
