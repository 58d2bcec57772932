from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"
STATUS_UNAVAILABLE = "Status Unavailable"

# Ordering anchor for records that carry no usable time at all
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class EventKind(str, Enum):
    SHIPMENT = "SHIPMENT"
    TRANSPORT = "TRANSPORT"
    EQUIPMENT = "EQUIPMENT"


class Classifier(str, Enum):
    ACTUAL = "ACT"
    PLANNED = "PLN"
    ESTIMATED = "EST"


class IconKind(str, Enum):
    VESSEL = "vessel"
    TRUCK = "truck"
    CONTAINER = "container"


@dataclass(frozen=True)
class LocationDescriptor:
    name: str = UNKNOWN
    city: str = UNKNOWN
    country: str = UNKNOWN
    code: Optional[str] = None

    @property
    def is_known(self) -> bool:
        return self.name != UNKNOWN

    def to_dict(self):
        return {
            "name": self.name,
            "city": self.city,
            "country": self.country,
            "code": self.code,
        }


UNKNOWN_LOCATION = LocationDescriptor()


@dataclass(frozen=True)
class VesselDescriptor:
    name: str
    voyage: str = ""

    def to_dict(self):
        return {"name": self.name, "voyage": self.voyage}


@dataclass(frozen=True)
class Event:
    """One canonical carrier event. Never mutated after ingestion."""
    kind: EventKind
    code: str
    classifier: Classifier
    timestamp: datetime
    arrival_index: int
    location: LocationDescriptor = UNKNOWN_LOCATION
    equipment_reference: Optional[str] = None
    iso_equipment_code: Optional[str] = None
    empty_indicator: Optional[str] = None
    transport_mode: Optional[str] = None
    vessel: Optional[VesselDescriptor] = None
    document_reference: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), repr=False, compare=False)

    @property
    def is_actual(self) -> bool:
        return self.classifier is Classifier.ACTUAL

    @property
    def is_movement(self) -> bool:
        return self.kind is not EventKind.SHIPMENT


@dataclass(frozen=True)
class TransportStep:
    location: LocationDescriptor
    icon: IconKind
    description: str
    timestamp: datetime
    classifier: Classifier
    vessel: Optional[VesselDescriptor] = None

    def to_dict(self):
        return {
            "location": self.location.to_dict(),
            "icon": self.icon.value,
            "description": self.description,
            "vessel": self.vessel.to_dict() if self.vessel else None,
            "timestamp": self.timestamp.isoformat(),
            "classifier": self.classifier.name,
        }


@dataclass(frozen=True)
class ContainerStatus:
    equipment_reference: str
    size: str
    status: str
    location: LocationDescriptor
    timestamp: datetime

    def to_dict(self):
        return {
            "equipmentReference": self.equipment_reference,
            "size": self.size,
            "status": self.status,
            "location": self.location.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ShipmentSummary:
    document_reference: str = NOT_AVAILABLE
    origin: str = NOT_AVAILABLE
    destination: str = NOT_AVAILABLE
    status: str = STATUS_UNAVAILABLE
    last_updated: str = NOT_AVAILABLE
    origin_rule: Optional[str] = None
    destination_rule: Optional[str] = None

    def to_dict(self):
        return {
            "documentReference": self.document_reference,
            "origin": self.origin,
            "destination": self.destination,
            "status": self.status,
        }
