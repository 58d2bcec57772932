from datetime import datetime, timezone

from app.services.containers import ContainerAggregator
from app.services.ingestor import EventIngestor
from app.services.sequencer import ChronologicalSequencer


def _sequenced(records):
    return ChronologicalSequencer.sequence(EventIngestor.ingest(records).events)


def test_one_status_per_distinct_container(journey):
    events = _sequenced(journey)
    containers = ContainerAggregator.aggregate(events)

    references = [c.equipment_reference for c in containers]
    assert references == ["MSKU1000", "MSKU2000"]
    assert set(references) == {e.equipment_reference for e in events if e.equipment_reference}


def test_groups_are_disjoint(journey):
    groups = ContainerAggregator.group(_sequenced(journey))

    seen = set()
    for reference, group in groups.items():
        indexes = {e.arrival_index for e in group}
        assert not indexes & seen
        assert all(e.equipment_reference == reference for e in group)
        seen |= indexes


def test_final_state_is_latest_event_of_that_container(journey):
    by_ref = {c.equipment_reference: c for c in ContainerAggregator.aggregate(_sequenced(journey))}

    first = by_ref["MSKU1000"]
    assert first.status == "Discharged from vessel"
    assert first.location.name == "Jeddah"
    assert first.size == "40' High Cube"
    assert first.timestamp == datetime(2025, 3, 21, 6, tzinfo=timezone.utc)

    second = by_ref["MSKU2000"]
    assert second.status == "Loaded on vessel"
    assert second.location.name == "Shanghai"
    assert second.size == "20' Dry Standard"


def test_size_uses_latest_reported_iso_code(make_equipment_event):
    events = _sequenced([
        make_equipment_event(code="GTIN", ts="2025-03-01T00:00:00Z", iso="22R1"),
        make_equipment_event(code="LOAD", ts="2025-03-02T00:00:00Z", iso=None),
    ])
    (container,) = ContainerAggregator.aggregate(events)

    assert container.status == "Loaded on vessel"
    assert container.size == "20' Reefer"


def test_events_without_equipment_produce_no_containers(make_transport_event, make_shipment_event):
    events = _sequenced([make_transport_event(), make_shipment_event()])
    assert ContainerAggregator.aggregate(events) == ()
