"""
Benefit plan identifiers.

The GraphQL API hands out global ids: base64 of "<GraphQLType>:<uuid>",
e.g. base64("BenefitPlanGQLType:6d0e...") . Lookups need the bare uuid.
"""

import base64
import binascii
import re

_BASE64_PATTERN = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")
_GLOBAL_ID_SEPARATOR = ":"


def is_base64_encoded(value) -> bool:
    """True if value is a base64 encoded "<type>:<id>" global id."""
    if not isinstance(value, str) or not value or len(value) % 4:
        return False
    if not _BASE64_PATTERN.match(value):
        return False
    try:
        decoded = base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return False
    return _GLOBAL_ID_SEPARATOR in decoded


def decode_id(value: str) -> str:
    decoded = base64.b64decode(value).decode("utf-8")
    return decoded.split(_GLOBAL_ID_SEPARATOR, 1)[1]


def encode_id(type_name: str, raw_id: str) -> str:
    return base64.b64encode(f"{type_name}{_GLOBAL_ID_SEPARATOR}{raw_id}".encode("utf-8")).decode("ascii")


def resolve_plan_id(value) -> str:
    """Decode value when it is a global id, otherwise return it unchanged."""
    if is_base64_encoded(value):
        return decode_id(value)
    return str(value)
