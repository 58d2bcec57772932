# schemas.py
from pydantic import BaseModel, Field
from typing import Optional


class TrackRequest(BaseModel):
    trackingNumber: str = Field(..., min_length=1, description="Transport document (B/L) reference")


class LocationOut(BaseModel):
    name: str
    city: str
    country: str
    code: Optional[str] = None


class VesselOut(BaseModel):
    name: str
    voyage: str = ""


class SummaryOut(BaseModel):
    documentReference: str
    origin: str
    destination: str
    status: str


class ContainerOut(BaseModel):
    equipmentReference: str
    size: str
    status: str
    location: LocationOut
    timestamp: str


class TransportStepOut(BaseModel):
    location: LocationOut
    icon: str
    description: str
    vessel: Optional[VesselOut] = None
    timestamp: str
    classifier: str


class DiagnosticsOut(BaseModel):
    eventCount: int
    droppedRecords: int
    originRule: Optional[str] = None
    destinationRule: Optional[str] = None


class TrackingResponse(BaseModel):
    summary: SummaryOut
    lastUpdated: str
    containers: list[ContainerOut]
    transportPlan: list[TransportStepOut]
    diagnostics: DiagnosticsOut
