import copy
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

import dateutil.parser

from app.errors import InvalidEventBatch
from app.models import EPOCH, Classifier, Event, EventKind, VesselDescriptor
from app.services.fields import dig, text
from app.services.location_resolver import LocationResolver

BATCH_FIELD = "events"

KIND_CODE_FIELDS = {
    EventKind.SHIPMENT: "shipmentEventTypeCode",
    EventKind.TRANSPORT: "transportEventTypeCode",
    EventKind.EQUIPMENT: "equipmentEventTypeCode",
}

# Checked in order; first parsable value wins
TIMESTAMP_FIELDS = ("eventCreatedDateTime", "eventDateTime")

CLASSIFIERS = {
    "ACT": Classifier.ACTUAL,
    "ACTUAL": Classifier.ACTUAL,
    "PLN": Classifier.PLANNED,
    "PLANNED": Classifier.PLANNED,
    "EST": Classifier.ESTIMATED,
    "ESTIMATED": Classifier.ESTIMATED,
}

# UN/EDIFACT numeric mode codes some feeds send instead of names
MODE_CODES = {"1": "VESSEL", "2": "RAIL", "3": "TRUCK", "8": "BARGE"}

# Missing date parts fall back to the sentinel, never to the current date
_PARSE_DEFAULT = EPOCH.replace(tzinfo=None)


@dataclass(frozen=True)
class IngestResult:
    events: tuple
    dropped: int = 0


def _to_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _to_utc(value)
    if not text(value):
        return None
    try:
        return _to_utc(dateutil.parser.parse(value, default=_PARSE_DEFAULT))
    except (ValueError, OverflowError):
        return None


class EventIngestor:
    """Turns carrier records of mixed shape into canonical Events."""

    @staticmethod
    def unwrap(payload: Any) -> list:
        """Accepts a bare list or a mapping holding the list under `events`."""
        if isinstance(payload, list):
            return payload
        if isinstance(payload, tuple):
            return list(payload)
        if isinstance(payload, Mapping) and isinstance(payload.get(BATCH_FIELD), (list, tuple)):
            return list(payload[BATCH_FIELD])
        raise InvalidEventBatch(
            f"Expected a list of events or an object with an '{BATCH_FIELD}' list, got {type(payload).__name__}"
        )

    @staticmethod
    def classify(record: Mapping) -> Optional[tuple]:
        """Returns (kind, code) or None when the record fits no known kind."""
        declared = text(record.get("eventType"))
        if declared and declared.upper() in EventKind.__members__:
            kind = EventKind[declared.upper()]
            code = text(record.get(KIND_CODE_FIELDS[kind]))
            if code:
                return kind, code

        for kind, field_name in KIND_CODE_FIELDS.items():
            code = text(record.get(field_name))
            if code:
                return kind, code
        return None

    @staticmethod
    def effective_timestamp(record: Mapping) -> datetime:
        for field_name in TIMESTAMP_FIELDS:
            parsed = _parse_timestamp(record.get(field_name))
            if parsed is not None:
                return parsed
        return EPOCH

    @staticmethod
    def vessel_of(record: Mapping) -> Optional[VesselDescriptor]:
        call = dig(record, "transportCall")
        name = text(dig(call, "vessel", "vesselName")) or text(dig(call, "vesselName"))
        if not name:
            return None
        voyage = (
            text(dig(call, "exportVoyageNumber"))
            or text(dig(call, "importVoyageNumber"))
            or text(dig(call, "carrierVoyageNumber"))
            or ""
        )
        return VesselDescriptor(name=name, voyage=voyage)

    @staticmethod
    def transport_mode_of(record: Mapping) -> Optional[str]:
        mode = text(dig(record, "transportCall", "modeOfTransport")) or text(
            dig(record, "transportCall", "modeOfTransportCode")
        )
        if not mode:
            return None
        return MODE_CODES.get(mode, mode.upper())

    @staticmethod
    def document_reference_of(record: Mapping) -> Optional[str]:
        direct = text(record.get("transportDocumentReference")) or text(record.get("documentID"))
        if direct:
            return direct
        refs = record.get("documentReferences")
        if isinstance(refs, list):
            for ref in refs:
                value = text(dig(ref, "documentReferenceValue"))
                if value:
                    return value
        return text(record.get("carrierBookingReference"))

    @staticmethod
    def build_event(record: Mapping, arrival_index: int) -> Optional[Event]:
        classified = EventIngestor.classify(record)
        if classified is None:
            return None
        kind, code = classified

        classifier_code = (text(record.get("eventClassifierCode")) or "ACT").upper()
        iso_code = text(record.get("ISOEquipmentCode"))
        empty = text(record.get("emptyIndicatorCode"))

        return Event(
            kind=kind,
            code=code,
            classifier=CLASSIFIERS.get(classifier_code, Classifier.ACTUAL),
            timestamp=EventIngestor.effective_timestamp(record),
            arrival_index=arrival_index,
            location=LocationResolver.resolve(record),
            equipment_reference=text(record.get("equipmentReference")),
            iso_equipment_code=iso_code.upper() if iso_code else None,
            empty_indicator=empty.upper() if empty else None,
            transport_mode=EventIngestor.transport_mode_of(record),
            vessel=EventIngestor.vessel_of(record),
            document_reference=EventIngestor.document_reference_of(record),
            raw=MappingProxyType(copy.deepcopy(dict(record))),
        )

    @staticmethod
    def ingest(payload: Any) -> IngestResult:
        """
        Normalizes a whole batch. Unclassifiable records are dropped and counted;
        only a payload that is not a record sequence at all raises.
        """
        records = EventIngestor.unwrap(payload)

        events = []
        dropped = 0
        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                dropped += 1
                continue
            event = EventIngestor.build_event(record, index)
            if event is None:
                dropped += 1
                continue
            events.append(event)

        return IngestResult(events=tuple(events), dropped=dropped)
