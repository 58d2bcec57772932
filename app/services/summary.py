from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from app.models import NOT_AVAILABLE, STATUS_UNAVAILABLE, Event, ShipmentSummary
from app.services.code_translator import CodeTranslator

FIRST_MOVEMENT_CODES = {"LOAD", "DEPA"}
ARRIVAL_CODES = {"DISC", "ARRI"}


@dataclass(frozen=True)
class LocationRule:
    rule_id: str
    description: str
    matches: Callable[[Event], bool]


# Evaluated top to bottom over the sequence; the first rule with a match decides.
ORIGIN_RULES = (
    LocationRule(
        "RULE_FIRST_MOVEMENT",
        "First load onto a vessel or vessel departure",
        lambda e: e.is_movement and e.code.upper() in FIRST_MOVEMENT_CODES,
    ),
    LocationRule(
        "RULE_FIRST_KNOWN_LOCATION",
        "First event with a resolved location",
        lambda e: e.location.is_known,
    ),
)

# Evaluated against the sequence from newest to oldest.
DESTINATION_RULES = (
    LocationRule(
        "RULE_LAST_ARRIVAL",
        "Last discharge or vessel arrival",
        lambda e: e.is_movement and e.code.upper() in ARRIVAL_CODES,
    ),
    LocationRule(
        "RULE_LAST_KNOWN_LOCATION",
        "Last event with a resolved location",
        lambda e: e.location.is_known,
    ),
)


def apply_rules(rules: Sequence[LocationRule], events: Sequence[Event]) -> tuple:
    """Returns (event, rule_id) for the first rule that matches, else (None, None)."""
    for rule in rules:
        for event in events:
            if rule.matches(event):
                return event, rule.rule_id
    return None, None


def recency_label(latest: Optional[datetime], now: datetime) -> str:
    if latest is None:
        return NOT_AVAILABLE
    days = (now - latest).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


class SummaryBuilder:
    """
    Derives the headline view of a shipment from sequenced events.

    Origin and destination come from ORIGIN_RULES / DESTINATION_RULES.
    Status only ever reflects an ACTUAL event; planned and estimated
    events never leak into it.
    """

    @staticmethod
    def origin(events: Sequence[Event]) -> tuple:
        event, rule_id = apply_rules(ORIGIN_RULES, events)
        return (event.location.name, rule_id) if event else (NOT_AVAILABLE, None)

    @staticmethod
    def destination(events: Sequence[Event]) -> tuple:
        event, rule_id = apply_rules(DESTINATION_RULES, tuple(reversed(events)))
        return (event.location.name, rule_id) if event else (NOT_AVAILABLE, None)

    @staticmethod
    def current_status(events: Sequence[Event]) -> str:
        for event in reversed(events):
            if event.is_actual:
                return CodeTranslator.describe_event(event)
        return STATUS_UNAVAILABLE

    @staticmethod
    def last_movement(events: Sequence[Event]) -> Optional[datetime]:
        # Any classifier counts; a planned move still ahead reads as "Today"
        for event in reversed(events):
            if event.is_movement:
                return event.timestamp
        return None

    @staticmethod
    def document_reference(events: Sequence[Event], explicit: Optional[str] = None) -> str:
        if explicit:
            return explicit
        for event in events:
            if event.document_reference:
                return event.document_reference
        return NOT_AVAILABLE

    @staticmethod
    def build(events: Sequence[Event], now: Optional[datetime] = None,
              document_reference: Optional[str] = None) -> ShipmentSummary:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        origin, origin_rule = SummaryBuilder.origin(events)
        destination, destination_rule = SummaryBuilder.destination(events)

        return ShipmentSummary(
            document_reference=SummaryBuilder.document_reference(events, document_reference),
            origin=origin,
            destination=destination,
            status=SummaryBuilder.current_status(events),
            last_updated=recency_label(SummaryBuilder.last_movement(events), now),
            origin_rule=origin_rule,
            destination_rule=destination_rule,
        )
