"""
JSON envelope codec for the accounts API.

Encoding omits optional fields that hold their default value. Decoding
rejects bodies that are not JSON or whose values have the wrong type
(MalformedPayloadError), and bodies that parse but carry no resource
(IncompletePayloadError).
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from accounts.errors import IncompletePayloadError, MalformedPayloadError
from accounts.resource import (
    ALTERNATIVE_NAME_LINES,
    NAME_LINES,
    ZERO_TIME,
    Data,
    Links,
    MultiPayload,
    Payload,
    Resource,
)

_TIMESTAMP_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})\Z"
)

_OPTIONAL_STRINGS = (
    "base_currency",
    "bank_id",
    "bank_id_code",
    "account_number",
    "bic",
    "iban",
    "customer_id",
)


# ----------------------------------------------------------------------
# Timestamps
# ----------------------------------------------------------------------

def format_timestamp(value: datetime) -> str:
    """Render a datetime as RFC 3339 UTC, e.g. ``2020-05-06T09:28:13.843Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    text = value.replace(microsecond=0, tzinfo=None).isoformat()
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    return text + "Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; fractions beyond microseconds are truncated."""
    match = _TIMESTAMP_RE.match(text)
    if not match:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
        tz = timezone(sign * delta)
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------

def resource_to_dict(resource: Resource) -> Dict[str, Any]:
    out: Dict[str, Any] = {"country": resource.country}
    for name in _OPTIONAL_STRINGS:
        value = getattr(resource, name)
        if value:
            out[name] = value
    out["name"] = list(resource.name)
    if any(resource.alternative_names):
        out["alternative_names"] = list(resource.alternative_names)
    if resource.account_classification:
        out["account_classification"] = resource.account_classification
    if resource.joint_account:
        out["joint_account"] = True
    if resource.account_matching_opt_out:
        out["account_matching_opt_out"] = True
    if resource.secondary_identification:
        out["secondary_identification"] = resource.secondary_identification
    if resource.switched:
        out["switched"] = True
    out["status"] = resource.status
    return out


def data_to_dict(data: Data) -> Dict[str, Any]:
    return {
        "id": data.id,
        "organisation_id": data.organisation_id,
        "type": data.type,
        "version": data.version,
        "created_on": format_timestamp(data.created_on),
        "modified_on": format_timestamp(data.modified_on),
        "attributes": resource_to_dict(data.attributes),
    }


def links_to_dict(links: Links) -> Dict[str, str]:
    out = {"self": links.self}
    for name in ("first", "next", "last"):
        value = getattr(links, name)
        if value:
            out[name] = value
    return out


def payload_to_dict(payload: Payload) -> Dict[str, Any]:
    out: Dict[str, Any] = {"data": data_to_dict(payload.data)}
    if not payload.links.is_empty():
        out["links"] = links_to_dict(payload.links)
    return out


def multi_payload_to_dict(payload: MultiPayload) -> Dict[str, Any]:
    out: Dict[str, Any] = {"data": [data_to_dict(d) for d in payload.data]}
    if not payload.links.is_empty():
        out["links"] = links_to_dict(payload.links)
    return out


def encode_payload(payload: Payload) -> bytes:
    """Render a payload as compact UTF-8 JSON."""
    return json.dumps(payload_to_dict(payload), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def encode_multi_payload(payload: MultiPayload) -> bytes:
    return json.dumps(multi_payload_to_dict(payload), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


# ----------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------

def _load(raw: Union[bytes, str]) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, TypeError, RecursionError) as exc:
        raise MalformedPayloadError(f"response body is not valid JSON: {exc}") from exc


def _object(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _string(obj: Dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedPayloadError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _bool(obj: Dict[str, Any], key: str, where: str) -> bool:
    value = obj.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MalformedPayloadError(f"{where}.{key}: expected a boolean, got {type(value).__name__}")
    return value


def _int(obj: Dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedPayloadError(f"{where}.{key}: expected an integer, got {type(value).__name__}")
    return value


def _timestamp(obj: Dict[str, Any], key: str, where: str) -> datetime:
    text = _string(obj, key, where)
    if not text:
        return ZERO_TIME
    try:
        return parse_timestamp(text)
    except ValueError as exc:
        raise MalformedPayloadError(f"{where}.{key}: {exc}") from exc


def _lines(obj: Dict[str, Any], key: str, size: int, where: str) -> Tuple[str, ...]:
    value = obj.get(key)
    if value is None:
        return ("",) * size
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedPayloadError(f"{where}.{key}: expected a list of strings")
    # Extra lines are dropped, missing ones left empty
    return tuple(value[:size])


def resource_from_dict(obj: Dict[str, Any], where: str = "attributes") -> Resource:
    return Resource(
        country=_string(obj, "country", where),
        base_currency=_string(obj, "base_currency", where),
        bank_id=_string(obj, "bank_id", where),
        bank_id_code=_string(obj, "bank_id_code", where),
        account_number=_string(obj, "account_number", where),
        bic=_string(obj, "bic", where),
        iban=_string(obj, "iban", where),
        customer_id=_string(obj, "customer_id", where),
        name=_lines(obj, "name", NAME_LINES, where),
        alternative_names=_lines(obj, "alternative_names", ALTERNATIVE_NAME_LINES, where),
        account_classification=_string(obj, "account_classification", where),
        joint_account=_bool(obj, "joint_account", where),
        account_matching_opt_out=_bool(obj, "account_matching_opt_out", where),
        secondary_identification=_string(obj, "secondary_identification", where),
        switched=_bool(obj, "switched", where),
        status=_string(obj, "status", where),
    )


def data_from_dict(obj: Dict[str, Any], where: str = "data") -> Data:
    return Data(
        id=_string(obj, "id", where),
        organisation_id=_string(obj, "organisation_id", where),
        type=_string(obj, "type", where),
        version=_int(obj, "version", where),
        created_on=_timestamp(obj, "created_on", where),
        modified_on=_timestamp(obj, "modified_on", where),
        attributes=resource_from_dict(_object(obj.get("attributes"), f"{where}.attributes"), f"{where}.attributes"),
    )


def links_from_dict(obj: Dict[str, Any]) -> Links:
    return Links(
        self=_string(obj, "self", "links"),
        first=_string(obj, "first", "links"),
        next=_string(obj, "next", "links"),
        last=_string(obj, "last", "links"),
    )


def _check_complete(data: Data, where: str) -> None:
    if data.is_empty():
        raise IncompletePayloadError(f"{where} is empty")
    if data.attributes.is_empty():
        raise IncompletePayloadError(f"{where}.attributes is empty")


def decode_payload(raw: Union[bytes, str]) -> Payload:
    """Decode a single-resource response body."""
    body = _object(_load(raw), "body")
    data = data_from_dict(_object(body.get("data"), "data"))
    links = links_from_dict(_object(body.get("links"), "links"))
    _check_complete(data, "data")
    return Payload(data=data, links=links)


def decode_multi_payload(raw: Union[bytes, str]) -> MultiPayload:
    """Decode a collection response body.

    An empty ``data`` list is a valid result; a missing one is not. One
    element without attributes fails the whole collection.
    """
    body = _object(_load(raw), "body")
    items: Optional[List[Any]] = body.get("data")
    if items is None:
        raise IncompletePayloadError("data is missing")
    if not isinstance(items, list):
        raise MalformedPayloadError(f"data: expected a list, got {type(items).__name__}")
    decoded = []
    for index, item in enumerate(items):
        where = f"data[{index}]"
        data = data_from_dict(_object(item, where), where)
        if data.attributes.is_empty():
            raise IncompletePayloadError(f"{where}.attributes is empty")
        decoded.append(data)
    links = links_from_dict(_object(body.get("links"), "links"))
    return MultiPayload(data=tuple(decoded), links=links)
