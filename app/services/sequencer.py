from typing import Iterable, Iterator

from app.models import Event


def _sort_key(event: Event):
    # Equal timestamps keep feed order so PLN/ACT pairs stay meaningful
    return event.timestamp, event.arrival_index


class ChronologicalSequencer:
    @staticmethod
    def iter_sequence(events: Iterable[Event]) -> Iterator[Event]:
        """One-shot ascending iterator over the events."""
        return iter(sorted(events, key=_sort_key))

    @staticmethod
    def sequence(events: Iterable[Event]) -> tuple:
        return tuple(ChronologicalSequencer.iter_sequence(events))
