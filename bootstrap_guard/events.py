"""Change notifications for off-chain observers.

Every registry/config mutation appends one ``Notification`` to an
``EventLog``. Subscribers are called synchronously, in subscription order,
after the mutation has been applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Callable, Dict, List, Tuple, Union


logger = logging.getLogger(__name__)


@unique
class Event(Enum):
    SIGNER_ADDED = "SignerAdded"
    SIGNER_REMOVED = "SignerRemoved"
    MARKET_SIGNER_SET = "MarketSignerSet"
    CAP_CONFIG_SET = "CapConfigSet"


FieldValue = Union[bool, int, str]


@dataclass(frozen=True)
class Notification:
    event: Event
    fields: Tuple[Tuple[str, FieldValue], ...] = ()

    def as_dict(self) -> Dict[str, FieldValue]:
        return dict(self.fields)

    def get(self, name: str) -> FieldValue:
        return self.as_dict()[name]


Subscriber = Callable[[Notification], None]


@dataclass
class EventLog:
    """Append-only notification log with synchronous subscribers."""

    _entries: List[Notification] = field(default_factory=list)
    _subscribers: List[Subscriber] = field(default_factory=list)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def emit(self, event: Event, **fields: FieldValue) -> Notification:
        note = Notification(event=event, fields=tuple(sorted(fields.items())))
        self._entries.append(note)
        logger.info("%s %s", event.value, note.as_dict())
        for callback in list(self._subscribers):
            callback(note)
        return note

    def entries(self, event: Event | None = None) -> List[Notification]:
        if event is None:
            return list(self._entries)
        return [n for n in self._entries if n.event == event]

    def __len__(self) -> int:
        return len(self._entries)
