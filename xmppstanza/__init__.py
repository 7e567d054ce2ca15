"""XMPP stream-level elements: features, SASL, binding, stream management, errors and a registry."""

__version__ = "0.1.0"

__all__ = [
    "registry",
    "stanza_errors",
    "stream",
    "stream_logger",
    "sasl_auth",
    "stream_features",
    "stream_management",
]