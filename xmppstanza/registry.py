"""Registry mapping packet payload tags to extension classes."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol, runtime_checkable

WILDCARD = "*"


class PacketType(IntEnum):
    """Kind of top-level stanza an extension belongs to."""

    PRESENCE = 0
    MESSAGE = 1
    IQ = 2


@dataclass(frozen=True)
class QName:
    """A namespace-qualified XML name."""

    namespace: str
    local: str

    @classmethod
    def from_tag(cls, tag: str) -> "QName":
        """Build a name from ElementTree's ``{namespace}local`` notation."""
        if tag.startswith("{"):
            namespace, _, local = tag[1:].partition("}")
            return cls(namespace, local)
        return cls("", tag)

    @property
    def tag(self) -> str:
        """The name in ElementTree's ``{namespace}local`` notation."""
        return f"{{{self.namespace}}}{self.local}" if self.namespace else self.local


@runtime_checkable
class IQPayload(Protocol):
    """Anything usable as the payload of an IQ stanza."""

    def namespace(self) -> str: ...


class Registry:
    """Thread-safe store of extension classes per packet type and namespace.

    A local name of ``"*"`` matches every otherwise unknown tag in its namespace.
    """

    def __init__(self) -> None:
        self._types: dict[tuple[PacketType, str], dict[str, type]] = {}
        self._lock = threading.RLock()

    def map_extension(self, packet_type: PacketType, name: QName, extension: Any) -> None:
        """Register ``extension`` (a class, or an instance of it) for ``name``."""
        cls = extension if isinstance(extension, type) else type(extension)
        key = (PacketType(packet_type), name.namespace)
        with self._lock:
            self._types.setdefault(key, {})[name.local] = cls

    def get_extension_type(self, packet_type: PacketType, name: QName) -> type | None:
        """Return the class registered for ``name``, or the namespace wildcard."""
        key = (PacketType(packet_type), name.namespace)
        with self._lock:
            store = self._types.get(key, {})
            result = store.get(name.local)
            if result is None and name.local != WILDCARD:
                return store.get(WILDCARD)
            return result

    def _instantiate(self, packet_type: PacketType, name: QName) -> Any:
        cls = self.get_extension_type(packet_type, name)
        return cls() if cls is not None else None

    def get_presence_extension(self, name: QName) -> Any:
        """Return a fresh presence extension instance for ``name``, or None."""
        return self._instantiate(PacketType.PRESENCE, name)

    def get_message_extension(self, name: QName) -> Any:
        """Return a fresh message extension instance for ``name``, or None."""
        return self._instantiate(PacketType.MESSAGE, name)

    def get_iq_extension(self, name: QName) -> IQPayload | None:
        """Return a fresh IQ payload instance for ``name``, or None.

        Registered classes that do not behave as IQ payloads yield None.
        """
        instance = self._instantiate(PacketType.IQ, name)
        if isinstance(instance, IQPayload):
            return instance
        return None


TYPE_REGISTRY = Registry()