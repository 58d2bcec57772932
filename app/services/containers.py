from typing import Iterable

from app.models import ContainerStatus, Event
from app.services.code_translator import CodeTranslator


class ContainerAggregator:
    """Final state per container, built only from that container's own events."""

    @staticmethod
    def group(events: Iterable[Event]) -> dict:
        groups = {}
        for event in events:
            if event.equipment_reference:
                groups.setdefault(event.equipment_reference, []).append(event)
        return groups

    @staticmethod
    def aggregate(events: Iterable[Event]) -> tuple:
        """Expects sequenced events; the last one per container is its final state."""
        statuses = []
        for reference, group in ContainerAggregator.group(events).items():
            final = group[-1]
            # Size does not change between moves, so any reported ISO code will do
            iso_code = next((e.iso_equipment_code for e in reversed(group) if e.iso_equipment_code), None)
            statuses.append(
                ContainerStatus(
                    equipment_reference=reference,
                    size=CodeTranslator.size_label(iso_code),
                    status=CodeTranslator.describe_event(final),
                    location=final.location,
                    timestamp=final.timestamp,
                )
            )
        return tuple(statuses)
