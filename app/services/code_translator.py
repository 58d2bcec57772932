from typing import Optional

from app.models import Event, EventKind, IconKind

# Carrier event codes -> display phrase. Unmapped codes pass through verbatim.
EVENT_DESCRIPTIONS = {
    # Equipment moves
    "GTIN": "Gate in",
    "GTOT": "Gate out",
    "LOAD": "Loaded on vessel",
    "DISC": "Discharged from vessel",
    "STUF": "Container stuffed",
    "STRP": "Container stripped",
    "PICK": "Picked up",
    "DROP": "Dropped off",
    "INSP": "Inspected",
    "RSEA": "Resealed",
    "RMVD": "Removed",
    # Vessel calls
    "DEPA": "Vessel departure",
    "ARRI": "Vessel arrival",
    # Document milestones
    "RECE": "Booking received",
    "DRFT": "Draft issued",
    "PENA": "Pending approval",
    "PENU": "Pending update",
    "PENC": "Pending confirmation",
    "REJE": "Rejected",
    "APPR": "Approved",
    "ISSU": "Transport document issued",
    "SURR": "Transport document surrendered",
    "SUBM": "Submitted",
    "VOID": "Voided",
    "CONF": "Booking confirmed",
    "REQS": "Requested",
    "CMPL": "Completed",
    "HOLD": "On hold",
    "RELS": "Released",
    "CANC": "Cancelled",
}

# ISO 6346 size/type code -> label
EQUIPMENT_SIZES = {
    "22G0": "20' Dry Standard",
    "22G1": "20' Dry Standard",
    "2200": "20' Dry Standard",
    "22R1": "20' Reefer",
    "22U1": "20' Open Top",
    "22P1": "20' Flat Rack",
    "22T1": "20' Tank",
    "42G0": "40' Dry Standard",
    "42G1": "40' Dry Standard",
    "4200": "40' Dry Standard",
    "42R1": "40' Reefer",
    "42U1": "40' Open Top",
    "42P1": "40' Flat Rack",
    "45G0": "40' High Cube",
    "45G1": "40' High Cube",
    "4500": "40' High Cube",
    "45R1": "40' Reefer High Cube",
    "L5G1": "45' High Cube",
    "L2G1": "45' Dry Standard",
}

DEFAULT_SIZE = "Standard"

VESSEL_MODES = {"VESSEL"}
TRUCK_MODES = {"TRUCK"}
VESSEL_CALL_CODES = {"ARRI", "DEPA"}
GROUND_MOVE_CODES = {"GTIN", "GTOT", "PICK", "DROP"}


class CodeTranslator:
    @staticmethod
    def describe(code: Optional[str], empty_indicator: Optional[str] = None) -> str:
        """Maps a carrier event code to its display phrase."""
        if not code:
            return ""
        phrase = EVENT_DESCRIPTIONS.get(code.upper(), code)
        if empty_indicator and empty_indicator.upper() == "EMPTY":
            return f"{phrase} (empty)"
        return phrase

    @staticmethod
    def describe_event(event: Event) -> str:
        return CodeTranslator.describe(event.code, event.empty_indicator)

    @staticmethod
    def size_label(iso_code: Optional[str]) -> str:
        if not iso_code:
            return DEFAULT_SIZE
        return EQUIPMENT_SIZES.get(iso_code.upper(), DEFAULT_SIZE)

    @staticmethod
    def icon_for(event: Event) -> IconKind:
        """First matching rule wins: vessel, then truck, then container."""
        mode = (event.transport_mode or "").upper()
        code = (event.code or "").upper()

        if mode in VESSEL_MODES or (event.kind is EventKind.TRANSPORT and code in VESSEL_CALL_CODES):
            return IconKind.VESSEL
        if mode in TRUCK_MODES or code in GROUND_MOVE_CODES:
            return IconKind.TRUCK
        return IconKind.CONTAINER
