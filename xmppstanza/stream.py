"""Stream header, STARTTLS nonzas and result-set (paging) elements."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import ClassVar
from xml.sax.saxutils import quoteattr

NS_STREAM = "http://etherx.jabber.org/streams"
NS_TLS = "urn:ietf:params:xml:ns:xmpp-tls"
NS_RSM = "http://jabber.org/protocol/rsm"
NS_QUERY_SET = "jabber:iq:search"

STREAM_CLOSE = "</stream:stream>"


@dataclass
class Stream:
    """Attributes of an opening ``<stream:stream>`` element."""

    from_: str = ""
    to: str = ""
    id: str = ""
    version: str = ""

    TAG: ClassVar[str] = f"{{{NS_STREAM}}}stream"

    @classmethod
    def from_element(cls, element: ET.Element) -> "Stream":
        """Read the stream header from a parsed element."""
        if element.tag != cls.TAG:
            raise ValueError(f"expected stream element, got {element.tag}")
        return cls(
            from_=element.get("from", ""),
            to=element.get("to", ""),
            id=element.get("id", ""),
            version=element.get("version", ""),
        )

    def to_xml(self) -> str:
        """Return the opening tag of the stream (left unclosed)."""
        parts = [f"<stream:stream xmlns:stream={quoteattr(NS_STREAM)}"]
        for name, value in (("from", self.from_), ("to", self.to), ("id", self.id), ("version", self.version)):
            if value:
                parts.append(f" {name}={quoteattr(value)}")
        parts.append(">")
        return "".join(parts)


@dataclass(frozen=True)
class TLSProceed:
    """Server's go-ahead for TLS negotiation."""

    TAG: ClassVar[str] = f"{{{NS_TLS}}}proceed"


@dataclass(frozen=True)
class TLSFailure:
    """Server's refusal of TLS negotiation."""

    TAG: ClassVar[str] = f"{{{NS_TLS}}}failure"


def _rsm(local: str) -> str:
    return f"{{{NS_RSM}}}{local}"


def _optional_int(text: str | None) -> int | None:
    return int(text.strip()) if text is not None and text.strip() else None


@dataclass
class First:
    """The ``<first/>`` element of a result set."""

    content: str = ""
    index: int | None = None


@dataclass
class ResultSet:
    """Result Set Management ``<set/>`` element."""

    after: str | None = None
    before: str | None = None
    count: int | None = None
    first: First | None = None
    index: int | None = None
    last: str | None = None
    max: int | None = None

    TAG: ClassVar[str] = _rsm("set")

    def to_element(self) -> ET.Element:
        """Build the ``<set/>`` element, omitting unset children."""
        root = ET.Element(self.TAG)
        for local, value in (("after", self.after), ("before", self.before), ("count", self.count)):
            if value is not None:
                ET.SubElement(root, _rsm(local)).text = str(value)
        if self.first is not None:
            first = ET.SubElement(root, _rsm("first"))
            first.text = self.first.content
            if self.first.index is not None:
                first.set("index", str(self.first.index))
        for local, value in (("index", self.index), ("last", self.last), ("max", self.max)):
            if value is not None:
                ET.SubElement(root, _rsm(local)).text = str(value)
        return root

    @classmethod
    def from_element(cls, element: ET.Element) -> "ResultSet":
        """Parse a ``<set/>`` element."""
        if element.tag != cls.TAG:
            raise ValueError(f"expected result set element, got {element.tag}")

        def text(local: str) -> str | None:
            child = element.find(_rsm(local))
            return None if child is None else (child.text or "")

        first = None
        first_el = element.find(_rsm("first"))
        if first_el is not None:
            first = First(content=first_el.text or "", index=_optional_int(first_el.get("index")))
        return cls(
            after=text("after"),
            before=text("before"),
            count=_optional_int(text("count")),
            first=first,
            index=_optional_int(text("index")),
            last=text("last"),
            max=_optional_int(text("max")),
        )