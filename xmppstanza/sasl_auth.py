"""SASL negotiation nonzas, resource binding and the legacy session payload."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import ClassVar

from .registry import TYPE_REGISTRY, PacketType, QName
from .stream import ResultSet

NS_SASL = "urn:ietf:params:xml:ns:xmpp-sasl"
NS_BIND = "urn:ietf:params:xml:ns:xmpp-bind"
NS_SESSION = "urn:ietf:params:xml:ns:xmpp-session"


def _check_tag(element: ET.Element, expected: str) -> None:
    if element.tag != expected:
        raise ValueError(f"expected element {expected} but have {element.tag}")


@dataclass
class SASLAuth:
    """Start of SASL authentication with the chosen mechanism."""

    mechanism: str = ""
    value: str = ""

    TAG: ClassVar[str] = f"{{{NS_SASL}}}auth"

    def to_element(self) -> ET.Element:
        """Build the ``<auth/>`` element."""
        element = ET.Element(self.TAG, {"mechanism": self.mechanism})
        element.text = self.value
        return element


@dataclass(frozen=True)
class SASLSuccess:
    """Server notice that SASL authentication succeeded."""

    TAG: ClassVar[str] = f"{{{NS_SASL}}}success"

    def name(self) -> str:
        return "sasl:success"


@dataclass(frozen=True)
class SASLFailure:
    """Server notice that SASL authentication failed, with its reason."""

    condition: QName | None = None

    TAG: ClassVar[str] = f"{{{NS_SASL}}}failure"

    def name(self) -> str:
        return "sasl:failure"


def decode_sasl_success(element: ET.Element) -> SASLSuccess:
    """Decode a ``<success/>`` element; raise ValueError for any other element."""
    _check_tag(element, SASLSuccess.TAG)
    return SASLSuccess()


def decode_sasl_failure(element: ET.Element) -> SASLFailure:
    """Decode a ``<failure/>`` element and its reason child."""
    _check_tag(element, SASLFailure.TAG)
    reason = next(iter(element), None)
    return SASLFailure(condition=None if reason is None else QName.from_tag(reason.tag))


@dataclass
class Bind:
    """Resource binding payload, both as IQ payload and stream feature."""

    resource: str = ""
    jid: str = ""
    result_set: ResultSet | None = None

    TAG: ClassVar[str] = f"{{{NS_BIND}}}bind"

    def namespace(self) -> str:
        return NS_BIND

    def to_element(self) -> ET.Element:
        """Build the ``<bind/>`` element, omitting empty children."""
        element = ET.Element(self.TAG)
        if self.resource:
            ET.SubElement(element, f"{{{NS_BIND}}}resource").text = self.resource
        if self.jid:
            ET.SubElement(element, f"{{{NS_BIND}}}jid").text = self.jid
        if self.result_set is not None:
            element.append(self.result_set.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> "Bind":
        """Parse a ``<bind/>`` element."""
        _check_tag(element, cls.TAG)
        set_el = element.find(ResultSet.TAG)
        return cls(
            resource=element.findtext(f"{{{NS_BIND}}}resource", ""),
            jid=element.findtext(f"{{{NS_BIND}}}jid", ""),
            result_set=None if set_el is None else ResultSet.from_element(set_el),
        )


def _is_optional_child(child: ET.Element) -> bool:
    return QName.from_tag(child.tag).local.lower() == "optional"


@dataclass
class StreamSession:
    """Obsolete session establishment, as stream feature and IQ payload.

    ``present`` tells whether the session element was actually there.
    """

    optional: bool = False
    present: bool = True
    result_set: ResultSet | None = None

    TAG: ClassVar[str] = f"{{{NS_SESSION}}}session"

    def namespace(self) -> str:
        return NS_SESSION if self.present else ""

    def is_optional(self) -> bool:
        """True when session establishment may be skipped."""
        if self.present:
            return self.optional
        # Without a session element there is no session to open.
        return True

    def to_element(self) -> ET.Element:
        """Build the ``<session/>`` element."""
        element = ET.Element(self.TAG)
        if self.optional:
            ET.SubElement(element, f"{{{NS_SESSION}}}optional")
        if self.result_set is not None:
            element.append(self.result_set.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> "StreamSession":
        """Parse a ``<session/>`` element."""
        _check_tag(element, cls.TAG)
        set_el = element.find(ResultSet.TAG)
        return cls(
            optional=any(_is_optional_child(child) for child in element),
            present=True,
            result_set=None if set_el is None else ResultSet.from_element(set_el),
        )


TYPE_REGISTRY.map_extension(PacketType.IQ, QName(NS_BIND, "bind"), Bind)
TYPE_REGISTRY.map_extension(PacketType.IQ, QName(NS_SESSION, "session"), StreamSession)