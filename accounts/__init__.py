"""Client for the organisation accounts API: validation, envelope codec, transport."""

from accounts.client import AccountsClient
from accounts.codec import decode_multi_payload, decode_payload, encode_payload
from accounts.config import AccountsConfig
from accounts.errors import (
    AccountsError,
    ConfigError,
    DecodeError,
    IncompletePayloadError,
    MalformedPayloadError,
    TransportError,
    UnexpectedStatusError,
    UnsupportedCountryError,
    ValidationError,
    Violation,
)
from accounts.resource import Data, Links, MultiPayload, Payload, Resource
from accounts.validation import SUPPORTED_COUNTRIES, validate_resource

__all__ = [
    "AccountsClient",
    "AccountsConfig",
    "AccountsError",
    "ConfigError",
    "Data",
    "DecodeError",
    "IncompletePayloadError",
    "Links",
    "MalformedPayloadError",
    "MultiPayload",
    "Payload",
    "Resource",
    "SUPPORTED_COUNTRIES",
    "TransportError",
    "UnexpectedStatusError",
    "UnsupportedCountryError",
    "ValidationError",
    "Violation",
    "decode_multi_payload",
    "decode_payload",
    "encode_payload",
    "validate_resource",
]
