from typing import Iterable, Sequence

from app.models import Event, EventKind, TransportStep
from app.services.code_translator import CodeTranslator


def newest_first(plan: Sequence[TransportStep]) -> tuple:
    """Display helper; the builder itself always returns oldest first."""
    return tuple(reversed(plan))


class TransportPlanBuilder:
    def __init__(self, include_document_events: bool = True):
        self.include_document_events = include_document_events

    def _keep(self, event: Event) -> bool:
        return self.include_document_events or event.kind is not EventKind.SHIPMENT

    @staticmethod
    def to_step(event: Event) -> TransportStep:
        return TransportStep(
            location=event.location,
            icon=CodeTranslator.icon_for(event),
            description=CodeTranslator.describe_event(event),
            timestamp=event.timestamp,
            classifier=event.classifier,
            vessel=event.vessel,
        )

    def build(self, events: Iterable[Event]) -> tuple:
        """Expects sequenced events; output keeps their ascending order."""
        return tuple(self.to_step(e) for e in events if self._keep(e))
