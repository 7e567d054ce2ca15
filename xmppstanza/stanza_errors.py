"""Defined error conditions carried by stanza and stream-management errors."""

from __future__ import annotations

from enum import Enum

NS_STANZAS = "urn:ietf:params:xml:ns:xmpp-stanzas"


class StanzaErrorCondition(Enum):
    """An error condition; the value is its XML tag name."""

    BAD_FORMAT = "bad-format"
    BAD_NAMESPACE_PREFIX = "bad-namespace-prefix"
    CONFLICT = "conflict"
    CONNECTION_TIMEOUT = "connection-timeout"
    HOST_GONE = "host-gone"
    HOST_UNKNOWN = "host-unknown"
    IMPROPER_ADDRESSING = "improper-addressing"
    INTERNAL_SERVER_ERROR = "internal-server-error"
    INVALID_FROM = "invalid-from"
    INVALID_ID = "invalid-id"
    INVALID_NAMESPACE = "invalid-namespace"
    INVALID_XML = "invalid-xml"
    NOT_AUTHORIZED = "not-authorized"
    NOT_WELL_FORMED = "not-well-formed"
    POLICY_VIOLATION = "policy-violation"
    REMOTE_CONNECTION_FAILED = "remote-connection-failed"
    RESET = "reset"
    RESOURCE_CONSTRAINT = "resource-constraint"
    RESTRICTED_XML = "restricted-xml"
    SEE_OTHER_HOST = "see-other-host"
    SYSTEM_SHUTDOWN = "system-shutdown"
    UNDEFINED_CONDITION = "undefined-condition"
    UNEXPECTED_REQUEST = "unexpected-request"
    UNSUPPORTED_ENCODING = "unsupported-encoding"
    UNSUPPORTED_STANZA_TYPE = "unsupported-stanza-type"
    UNSUPPORTED_VERSION = "unsupported-version"
    XML_NOT_WELL_FORMED = "xml-not-well-formed"

    def group_error_name(self) -> str:
        """Return the condition's tag name."""
        return self.value

    @property
    def tag(self) -> str:
        """The condition as a namespaced ElementTree tag."""
        return f"{{{NS_STANZAS}}}{self.value}"


def error_condition_from_tag(tag: str) -> StanzaErrorCondition:
    """Return the condition for a tag, plain or in ``{namespace}local`` form.

    Raises ValueError for an unknown condition.
    """
    local = tag.rpartition("}")[2] if tag.startswith("{") else tag
    try:
        return StanzaErrorCondition(local)
    except ValueError:
        raise ValueError("error is unknown") from None