import threading

import pytest

from xmppstanza.registry import PacketType, QName, Registry


class ReceiptRequest:
    def __init__(self):
        self.seen = []


class FakeIQPayload:
    def namespace(self):
        return "urn:example:iq"


RECEIPT_NAME = QName("urn:xmpp:receipts", "request")


def test_register_msg_ext():
    registry = Registry()
    registry.map_extension(PacketType.MESSAGE, RECEIPT_NAME, ReceiptRequest())
    assert registry.get_extension_type(PacketType.MESSAGE, RECEIPT_NAME) is ReceiptRequest
    receipt = registry.get_message_extension(RECEIPT_NAME)
    assert isinstance(receipt, ReceiptRequest)
    assert receipt.seen == []


def test_register_with_class():
    registry = Registry()
    registry.map_extension(PacketType.MESSAGE, RECEIPT_NAME, ReceiptRequest)
    assert registry.get_extension_type(PacketType.MESSAGE, RECEIPT_NAME) is ReceiptRequest


def test_returns_fresh_instances():
    registry = Registry()
    registry.map_extension(PacketType.MESSAGE, RECEIPT_NAME, ReceiptRequest)
    first = registry.get_message_extension(RECEIPT_NAME)
    second = registry.get_message_extension(RECEIPT_NAME)
    first.seen.append("ack")
    assert first.seen == ["ack"]
    assert second.seen == []


def test_packet_types_are_separate():
    registry = Registry()
    registry.map_extension(PacketType.MESSAGE, RECEIPT_NAME, ReceiptRequest)
    assert registry.get_presence_extension(RECEIPT_NAME) is None
    assert registry.get_extension_type(PacketType.IQ, RECEIPT_NAME) is None


def test_unknown_name_returns_none():
    registry = Registry()
    assert registry.get_message_extension(RECEIPT_NAME) is None


def test_wildcard_fallback():
    registry = Registry()
    registry.map_extension(PacketType.PRESENCE, QName("urn:example", "*"), ReceiptRequest)
    found = registry.get_presence_extension(QName("urn:example", "anything"))
    assert isinstance(found, ReceiptRequest)
    assert registry.get_presence_extension(QName("urn:other", "anything")) is None


def test_exact_match_preferred_over_wildcard():
    registry = Registry()
    registry.map_extension(PacketType.MESSAGE, QName("urn:example", "*"), ReceiptRequest)
    registry.map_extension(PacketType.MESSAGE, QName("urn:example", "x"), FakeIQPayload)
    assert registry.get_extension_type(PacketType.MESSAGE, QName("urn:example", "x")) is FakeIQPayload


def test_iq_extension_requires_payload_interface():
    registry = Registry()
    good = QName("urn:example:iq", "query")
    bad = QName("urn:example:iq", "other")
    registry.map_extension(PacketType.IQ, good, FakeIQPayload)
    registry.map_extension(PacketType.IQ, bad, ReceiptRequest)
    payload = registry.get_iq_extension(good)
    assert isinstance(payload, FakeIQPayload)
    assert payload.namespace() == "urn:example:iq"
    assert registry.get_iq_extension(bad) is None


def test_remapping_overrides():
    registry = Registry()
    registry.map_extension(PacketType.MESSAGE, RECEIPT_NAME, ReceiptRequest)
    registry.map_extension(PacketType.MESSAGE, RECEIPT_NAME, FakeIQPayload)
    assert registry.get_extension_type(PacketType.MESSAGE, RECEIPT_NAME) is FakeIQPayload


def test_concurrent_registration():
    registry = Registry()

    def register(i):
        registry.map_extension(PacketType.MESSAGE, QName("urn:example", f"n{i}"), ReceiptRequest)

    threads = [threading.Thread(target=register, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert all(
        registry.get_extension_type(PacketType.MESSAGE, QName("urn:example", f"n{i}")) is ReceiptRequest
        for i in range(20)
    )


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("{urn:xmpp:receipts}request", RECEIPT_NAME),
        ("request", QName("", "request")),
    ],
)
def test_qname_from_tag_round_trip(tag, expected):
    name = QName.from_tag(tag)
    assert name == expected
    assert name.tag == tag