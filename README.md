# xmppstanza

Building blocks for the stream layer of XMPP (RFC 6120 and XEP-0198). Elements
are built and parsed with `xml.etree.ElementTree`. The package needs nothing
outside the standard library.

## Modules

- `xmppstanza.registry`
  - `Registry` maps a `PacketType` (`PRESENCE`, `MESSAGE`, `IQ`) and a `QName`
    (namespace plus local name) to an extension class.
  - `map_extension(packet_type, name, extension)` registers a class. You may also
    pass an instance, and its class is then registered.
  - `get_extension_type` returns the registered class. When no class is
    registered under the exact local name, it falls back to the class registered
    under `"*"` for that namespace.
  - `get_message_extension`, `get_presence_extension` and `get_iq_extension`
    return a fresh instance of the registered class, or `None`.
    `get_iq_extension` also returns `None` when the class has no `namespace()`
    method.
  - `QName.from_tag` and `QName.tag` convert to and from ElementTree's
    `{namespace}local` notation.
  - `TYPE_REGISTRY` is the shared registry. Importing `xmppstanza.sasl_auth`
    registers `Bind` and `StreamSession` in it as IQ payloads.
- `xmppstanza.stanza_errors`
  - `StanzaErrorCondition` is an enum of the defined error conditions. Each
    member's value is its tag name, returned by `group_error_name()`, and its
    `tag` property gives the namespaced form.
  - `error_condition_from_tag(tag)` accepts a plain or namespaced tag and raises
    `ValueError` for an unknown condition.
- `xmppstanza.stream`
  - `Stream` is the stream header. `Stream.from_element` parses it, and
    `to_xml()` returns the opening tag, left unclosed.
  - `TLSProceed` and `TLSFailure` carry the tags of the STARTTLS replies.
  - `ResultSet` and `First` are the XEP-0059 paging elements, with
    `to_element` and `from_element`.
  - `STREAM_CLOSE` holds the closing tag.
- `xmppstanza.stream_logger`
  - `new_stream_logger(conn, log_file)` returns `conn` unchanged when `log_file`
    is `None`. Otherwise it returns a `StreamLogger`.
  - `StreamLogger` copies every read to the log file as `RECV:\n<data>\n\n`, and
    every write as `SEND:\n<data>\n\n`.
  - A partial write raises `ShortWriteError`.
- `xmppstanza.sasl_auth`
  - `SASLAuth` (`to_element`).
  - `SASLSuccess` and `SASLFailure`, decoded with `decode_sasl_success` and
    `decode_sasl_failure`. The failure reason is kept as a `QName`.
  - Resource `Bind`.
  - The obsolete `StreamSession`. Its `is_optional()` returns `True` when the
    `<optional/>` child is present, or when the session element itself is
    absent.
- `xmppstanza.stream_features`
  - `StreamFeatures.from_xml` / `from_element` parse `<stream:features/>` into
    caps, STARTTLS, SASL mechanisms, bind, stream management, session and the
    `p1:` extensions. Unknown children are kept in `other`.
  - `to_element` / `to_xml` build the element again.
  - `does_start_tls()` returns the `TLSStartTLS` feature, or `None` when it is
    not offered.
  - `does_stream_management()` returns a bool.
  - The module also provides `Caps`, `StreamError` (`from_element`) and
    `StreamClosePacket`.
- `xmppstanza.stream_management`
  - The XEP-0198 nonzas are `SMEnable`, `SMEnabled`, `SMRequest`, `SMAnswer`,
    `SMResume`, `SMResumed` and `SMFailed`.
  - `decode_stream_management(element)` decodes any of them and raises
    `ValueError` for anything else. It also raises `ValueError` when `<failed/>`
    carries an unknown condition.
  - `UnAckQueue` is a thread-safe FIFO of `UnAckedStanza` items. `push` numbers
    each new item one past the last queued item, starting at 1. The queue also
    offers `peek`, `peek_n`, `pop`, `pop_n` and `empty`.

## Example

```python
from xmppstanza.stream_features import StreamFeatures

features = StreamFeatures.from_xml(
    "<stream:features xmlns:stream='http://etherx.jabber.org/streams'>"
    "<starttls xmlns='urn:ietf:params:xml:ns:xmpp-tls'><required/></starttls>"
    "</stream:features>"
)
tls = features.does_start_tls()
assert tls is not None and tls.required
assert not features.does_stream_management()
```

## What it does not do

This is a library of stream-level elements only. It does not:

- open connections, negotiate TLS, run SASL exchanges or manage reconnection;
- provide a client, a component or a command;
- model message, presence or IQ stanzas. The registry only maps payload tags to
  classes that you supply.

## Running the tests

```
pip install -e .[test]
pytest
```