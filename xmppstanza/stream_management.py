"""Stream management (acknowledgements and resumption) nonzas and queue."""

from __future__ import annotations

import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Union

from .registry import QName
from .stanza_errors import StanzaErrorCondition, error_condition_from_tag

NS_STREAM_MANAGEMENT = "urn:xmpp:sm:3"


def _sm(local: str) -> str:
    return f"{{{NS_STREAM_MANAGEMENT}}}{local}"


def _check_tag(element: ET.Element, expected: str) -> None:
    if element.tag != expected:
        raise ValueError(f"expected element {expected} but have {element.tag}")


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass
class SMEnable:
    """Client request to enable stream management."""

    max: int | None = None
    resume: bool | None = None

    TAG: ClassVar[str] = _sm("enable")

    def to_element(self) -> ET.Element:
        """Build the ``<enable/>`` element, omitting unset attributes."""
        element = ET.Element(self.TAG)
        if self.max is not None:
            element.set("max", str(self.max))
        if self.resume is not None:
            element.set("resume", "true" if self.resume else "false")
        return element


@dataclass
class SMEnabled:
    """Server confirmation that stream management is enabled."""

    id: str = ""
    location: str = ""
    resume: str = ""
    max: int = 0

    TAG: ClassVar[str] = _sm("enabled")

    def name(self) -> str:
        return "Stream Management: enabled"


@dataclass
class UnAckedStanza:
    """A sent stanza that the server has not acknowledged yet."""

    id: int
    stanza: str

    def queueable_name(self) -> str:
        return "Un-acknowledged stanza"


@dataclass
class UnAckQueue:
    """FIFO of unacknowledged stanzas, numbered from 1 as they are pushed."""

    items: list[UnAckedStanza] = field(default_factory=list)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.items)

    def peek_n(self, n: int) -> list[UnAckedStanza]:
        """Return up to ``n`` stanzas from the front without removing them."""
        if n <= 0:
            return []
        with self._lock:
            return self.items[:n]

    def pop(self) -> UnAckedStanza | None:
        """Remove and return the oldest stanza, or None if the queue is empty."""
        with self._lock:
            if not self.items:
                return None
            return self.items.pop(0)

    def pop_n(self, n: int) -> list[UnAckedStanza]:
        """Remove and return up to ``n`` stanzas from the front."""
        with self._lock:
            popped = self.peek_n(n)
            del self.items[: len(popped)]
            return popped

    def peek(self) -> UnAckedStanza | None:
        """Return the oldest stanza without removing it, or None."""
        with self._lock:
            return self.items[0] if self.items else None

    def push(self, stanza: UnAckedStanza) -> None:
        """Append a copy of ``stanza`` numbered after the last queued one."""
        if not isinstance(stanza, UnAckedStanza):
            raise TypeError("element in not compatible with this queue. expected an UnAckedStanza")
        with self._lock:
            next_id = self.items[-1].id + 1 if self.items else 1
            self.items.append(UnAckedStanza(id=next_id, stanza=stanza.stanza))

    def empty(self) -> bool:
        """True when nothing is waiting for acknowledgement."""
        with self._lock:
            return not self.items


@dataclass(frozen=True)
class SMRequest:
    """Request for an acknowledgement."""

    TAG: ClassVar[str] = _sm("r")

    def name(self) -> str:
        return "Stream Management: request"

    def to_element(self) -> ET.Element:
        return ET.Element(self.TAG)


@dataclass
class SMAnswer:
    """Acknowledgement carrying the count of handled stanzas."""

    h: int = 0

    TAG: ClassVar[str] = _sm("a")

    def name(self) -> str:
        return "Stream Management: answer"

    def to_element(self) -> ET.Element:
        return ET.Element(self.TAG, {"h": str(self.h)})


@dataclass
class SMResumed:
    """Server confirmation that a previous stream was resumed."""

    prev_id: str = ""
    h: int | None = None

    TAG: ClassVar[str] = _sm("resumed")

    def name(self) -> str:
        return "Stream Management: resumed"


@dataclass
class SMResume:
    """Request to resume a previous stream."""

    prev_id: str = ""
    h: int | None = None

    TAG: ClassVar[str] = _sm("resume")

    def name(self) -> str:
        return "Stream Management: resume"

    def to_element(self) -> ET.Element:
        """Build the ``<resume/>`` element, omitting unset attributes."""
        element = ET.Element(self.TAG)
        if self.prev_id:
            element.set("previd", self.prev_id)
        if self.h is not None:
            element.set("h", str(self.h))
        return element


@dataclass
class SMFailed:
    """Failure to enable or resume stream management, with its condition."""

    h: int | None = None
    condition: StanzaErrorCondition | None = None

    TAG: ClassVar[str] = _sm("failed")

    def name(self) -> str:
        return "Stream Management: failed"

    @classmethod
    def from_element(cls, element: ET.Element) -> "SMFailed":
        """Parse ``<failed/>``; raise ValueError for an unknown condition."""
        _check_tag(element, cls.TAG)
        packet = cls(h=_optional_int(element.get("h")))
        for child in element:
            packet.condition = error_condition_from_tag(child.tag)
        return packet


SMPacket = Union[SMEnabled, SMResumed, SMResume, SMRequest, SMAnswer, SMFailed]


def _decode_enabled(element: ET.Element) -> SMEnabled:
    return SMEnabled(
        id=element.get("id", ""),
        location=element.get("location", ""),
        resume=element.get("resume", ""),
        max=_optional_int(element.get("max")) or 0,
    )


def _decode_resumed(element: ET.Element) -> SMResumed:
    return SMResumed(prev_id=element.get("previd", ""), h=_optional_int(element.get("h")))


def _decode_resume(element: ET.Element) -> SMResume:
    return SMResume(prev_id=element.get("previd", ""), h=_optional_int(element.get("h")))


def _decode_request(element: ET.Element) -> SMRequest:
    return SMRequest()


def _decode_answer(element: ET.Element) -> SMAnswer:
    return SMAnswer(h=_optional_int(element.get("h")) or 0)


_DECODERS: dict[str, Callable[[ET.Element], SMPacket]] = {
    "enabled": _decode_enabled,
    "resumed": _decode_resumed,
    "resume": _decode_resume,
    "r": _decode_request,
    "a": _decode_answer,
    "failed": SMFailed.from_element,
}


def decode_stream_management(element: ET.Element) -> SMPacket:
    """Decode any known nonza of the stream management namespace.

    Raises ValueError for an unexpected element.
    """
    name = QName.from_tag(element.tag)
    decoder = _DECODERS.get(name.local) if name.namespace == NS_STREAM_MANAGEMENT else None
    if decoder is None:
        raise ValueError(f"unexpected XMPP packet {name.namespace} <{name.local}/>")
    return decoder(element)