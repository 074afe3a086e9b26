from dataclasses import dataclass, asdict
from typing import Any, List, Optional
from nftledger.logger import get_logger

TRANSFER = 'Transfer'
APPROVAL = 'Approval'
APPROVAL_FOR_ALL = 'ApprovalForAll'


@dataclass(frozen=True)
class Event:
    status: bool

    name = 'Event'

    def to_dict(self) -> dict:
        d = {'event': self.name}
        d.update(asdict(self))
        return d


@dataclass(frozen=True)
class TransferEvent(Event):
    """Ownership change. sender is None for a mint, to is None for a burn."""
    sender: Optional[str]
    to: Optional[str]
    token_id: Any

    name = TRANSFER


@dataclass(frozen=True)
class ApprovalEvent(Event):
    owner: str
    spender: Optional[str]
    token_id: Any

    name = APPROVAL


@dataclass(frozen=True)
class ApprovalForAllEvent(Event):
    owner: str
    operator: str
    approved: bool

    name = APPROVAL_FOR_ALL


class Emitter:
    def emit(self, event: Event):
        raise NotImplementedError


class NullEmitter(Emitter):
    def emit(self, event: Event):
        pass


class RecordingEmitter(Emitter):
    def __init__(self):
        self.events: List[Event] = []

    def emit(self, event: Event):
        self.events.append(event)

    def of_kind(self, name):
        return [e for e in self.events if e.name == name]

    def clear(self):
        self.events = []


class LoggingEmitter(Emitter):
    def __init__(self, name='nftledger.events'):
        self.log = get_logger(name)

    def emit(self, event: Event):
        self.log.info('{} {}'.format(event.name, event.to_dict()))


class MultiEmitter(Emitter):
    def __init__(self, *emitters: Emitter):
        self.emitters = list(emitters)

    def emit(self, event: Event):
        for emitter in self.emitters:
            emitter.emit(event)
