from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from loguru import logger

from app.models import ShipmentSummary
from app.services.containers import ContainerAggregator
from app.services.ingestor import EventIngestor
from app.services.sequencer import ChronologicalSequencer
from app.services.summary import SummaryBuilder
from app.services.transport_plan import TransportPlanBuilder, newest_first


@dataclass(frozen=True)
class TrackingResult:
    summary: ShipmentSummary = field(default_factory=ShipmentSummary)
    containers: tuple = ()
    transport_plan: tuple = ()
    event_count: int = 0
    dropped_records: int = 0

    def to_dict(self, newest_first_plan: bool = False):
        plan = newest_first(self.transport_plan) if newest_first_plan else self.transport_plan
        return {
            "summary": self.summary.to_dict(),
            "lastUpdated": self.summary.last_updated,
            "containers": [c.to_dict() for c in self.containers],
            "transportPlan": [s.to_dict() for s in plan],
            "diagnostics": {
                "eventCount": self.event_count,
                "droppedRecords": self.dropped_records,
                "originRule": self.summary.origin_rule,
                "destinationRule": self.summary.destination_rule,
            },
        }


class TrackingEngine:
    """
    Reconciles one raw event batch into a shipment view:
    ingest -> sequence -> summary / transport plan / containers.
    Pure; every call works on its own payload only.
    """

    def __init__(self, include_document_events: bool = True):
        self.plan_builder = TransportPlanBuilder(include_document_events=include_document_events)

    def reconcile(self, payload: Any, document_reference: Optional[str] = None,
                  now: Optional[datetime] = None) -> TrackingResult:
        # 1) Normalize (raises InvalidEventBatch on a non-sequence payload)
        ingested = EventIngestor.ingest(payload)

        # 2) Order
        events = ChronologicalSequencer.sequence(ingested.events)

        # 3) Derive views
        result = TrackingResult(
            summary=SummaryBuilder.build(events, now=now, document_reference=document_reference),
            containers=ContainerAggregator.aggregate(events),
            transport_plan=self.plan_builder.build(events),
            event_count=len(events),
            dropped_records=ingested.dropped,
        )

        if ingested.dropped:
            logger.warning(f"[Engine] Dropped {ingested.dropped} unclassifiable record(s)")
        logger.info(
            f"[Engine] {result.summary.document_reference}: {len(events)} events, "
            f"{len(result.containers)} containers, status '{result.summary.status}'"
        )
        return result
