"""Stream features advertised by the server, stream errors and stream close."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import ClassVar

from .registry import QName
from .sasl_auth import NS_SASL, Bind, StreamSession
from .stream import NS_STREAM, NS_TLS

NS_CAPS = "http://jabber.org/protocol/caps"
NS_STREAM_MANAGEMENT = "urn:xmpp:sm:3"
NS_STREAMS_ERRORS = "urn:ietf:params:xml:ns:xmpp-streams"
NS_P1_PUSH = "p1:push"
NS_P1_REBIND = "p1:rebind"
NS_P1_ACK = "p1:ack"

_MECHANISMS_TAG = f"{{{NS_SASL}}}mechanisms"
_MECHANISM_TAG = f"{{{NS_SASL}}}mechanism"
_SM_TAG = f"{{{NS_STREAM_MANAGEMENT}}}sm"
_P1_PUSH_TAG = f"{{{NS_P1_PUSH}}}push"
_P1_REBIND_TAG = f"{{{NS_P1_REBIND}}}rebind"
_P1_ACK_TAG = f"{{{NS_P1_ACK}}}ack"


@dataclass
class Caps:
    """Server entity capabilities advertised with the features."""

    hash: str = ""
    node: str = ""
    ver: str = ""
    ext: str = ""

    TAG: ClassVar[str] = f"{{{NS_CAPS}}}c"

    @classmethod
    def from_element(cls, element: ET.Element) -> "Caps":
        return cls(
            hash=element.get("hash", ""),
            node=element.get("node", ""),
            ver=element.get("ver", ""),
            ext=element.get("ext", ""),
        )

    def to_element(self) -> ET.Element:
        element = ET.Element(self.TAG, {"hash": self.hash, "node": self.node, "ver": self.ver})
        if self.ext:
            element.set("ext", self.ext)
        return element


@dataclass
class TLSStartTLS:
    """The STARTTLS feature and whether the server requires it."""

    required: bool = False

    TAG: ClassVar[str] = f"{{{NS_TLS}}}starttls"

    @classmethod
    def from_element(cls, element: ET.Element) -> "TLSStartTLS":
        """Parse ``<starttls/>``, detecting a ``<required/>`` child."""
        if element.tag != cls.TAG:
            raise ValueError(f"expected element {cls.TAG} but have {element.tag}")
        return cls(required=any(QName.from_tag(child.tag).local == "required" for child in element))

    def to_element(self) -> ET.Element:
        element = ET.Element(self.TAG)
        if self.required:
            ET.SubElement(element, f"{{{NS_TLS}}}required")
        return element


@dataclass
class StreamFeatures:
    """The ``<stream:features/>`` packet."""

    caps: Caps | None = None
    start_tls: TLSStartTLS | None = None
    mechanisms: list[str] = field(default_factory=list)
    bind: Bind | None = None
    stream_management: bool = False
    session: StreamSession | None = None
    p1_push: bool = False
    p1_rebind: bool = False
    p1_ack: bool = False
    other: list[QName] = field(default_factory=list)

    TAG: ClassVar[str] = f"{{{NS_STREAM}}}features"

    def name(self) -> str:
        return "stream:features"

    @classmethod
    def from_element(cls, element: ET.Element) -> "StreamFeatures":
        """Parse a features element; unknown children are kept in ``other``."""
        if element.tag != cls.TAG:
            raise ValueError(f"expected element {cls.TAG} but have {element.tag}")
        features = cls()
        for child in element:
            tag = child.tag
            if tag == Caps.TAG:
                features.caps = Caps.from_element(child)
            elif tag == TLSStartTLS.TAG:
                features.start_tls = TLSStartTLS.from_element(child)
            elif tag == _MECHANISMS_TAG:
                features.mechanisms = [m.text or "" for m in child.findall(_MECHANISM_TAG)]
            elif tag == Bind.TAG:
                features.bind = Bind.from_element(child)
            elif tag == _SM_TAG:
                features.stream_management = True
            elif tag == StreamSession.TAG:
                features.session = StreamSession.from_element(child)
            elif tag == _P1_PUSH_TAG:
                features.p1_push = True
            elif tag == _P1_REBIND_TAG:
                features.p1_rebind = True
            elif tag == _P1_ACK_TAG:
                features.p1_ack = True
            else:
                features.other.append(QName.from_tag(tag))
        return features

    @classmethod
    def from_xml(cls, text: str | bytes) -> "StreamFeatures":
        """Parse a features packet from its XML text."""
        return cls.from_element(ET.fromstring(text))

    def to_element(self) -> ET.Element:
        """Build the features element with the advertised features only."""
        root = ET.Element(self.TAG)
        if self.caps is not None:
            root.append(self.caps.to_element())
        if self.start_tls is not None:
            root.append(self.start_tls.to_element())
        if self.mechanisms:
            mechanisms = ET.SubElement(root, _MECHANISMS_TAG)
            for mechanism in self.mechanisms:
                ET.SubElement(mechanisms, _MECHANISM_TAG).text = mechanism
        if self.bind is not None:
            root.append(self.bind.to_element())
        if self.stream_management:
            ET.SubElement(root, _SM_TAG)
        if self.session is not None and self.session.present:
            root.append(self.session.to_element())
        for enabled, tag in (
            (self.p1_push, _P1_PUSH_TAG),
            (self.p1_rebind, _P1_REBIND_TAG),
            (self.p1_ack, _P1_ACK_TAG),
        ):
            if enabled:
                ET.SubElement(root, tag)
        for name in self.other:
            ET.SubElement(root, name.tag)
        return root

    def to_xml(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode")

    def does_start_tls(self) -> TLSStartTLS | None:
        """Return the STARTTLS feature if the server offers it, else None."""
        return self.start_tls

    def does_stream_management(self) -> bool:
        """True if the server offers stream management (XEP-0198 v3)."""
        return self.stream_management


@dataclass
class StreamError:
    """The ``<stream:error/>`` packet: condition and optional text."""

    error: QName | None = None
    text: str = ""

    TAG: ClassVar[str] = f"{{{NS_STREAM}}}error"
    TEXT_TAG: ClassVar[str] = f"{{{NS_STREAMS_ERRORS}}}text"

    def name(self) -> str:
        return "stream:error"

    @classmethod
    def from_element(cls, element: ET.Element) -> "StreamError":
        if element.tag != cls.TAG:
            raise ValueError(f"expected element {cls.TAG} but have {element.tag}")
        packet = cls()
        for child in element:
            if child.tag == cls.TEXT_TAG:
                packet.text = child.text or ""
            elif packet.error is None:
                packet.error = QName.from_tag(child.tag)
        return packet


@dataclass(frozen=True)
class StreamClosePacket:
    """The closing ``</stream:stream>`` tag; carries no data."""

    def name(self) -> str:
        return "stream:stream"