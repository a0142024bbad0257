"""Composite resource identity encoding.

A resource's durable identity is an ordered mapping of string keys to
string values (e.g. ``{"project_id": "5f1a..."}``). It is serialised to a
single token that is used as the externally visible resource id.

Format::

    b64(key1):b64(value1)-b64(key2):b64(value2)

Keys and values are standard-base64 encoded, so neither the pair
separator ``:`` nor the entry separator ``-`` can appear inside them and
every string mapping round-trips. Entry order follows the mapping's
insertion order, which keeps the token stable for the same mapping.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping

from atlas_regional_mode.core.exceptions import ValidationError

_PAIR_SEPARATOR = ":"
_ENTRY_SEPARATOR = "-"


class IdentityDecodeError(ValidationError):
    """Raised when a resource id token cannot be decoded."""

    default_operation = "identity"
    default_code = "IDENTITY_DECODE_FAILED"


def encode_state_id(values: Mapping[str, str]) -> str:
    """Encode an ordered identity mapping into a single resource id token.

    Args:
        values: Ordered mapping of identity keys to values.

    Returns:
        The encoded token (empty string for an empty mapping).
    """
    return _ENTRY_SEPARATOR.join(
        f"{_b64encode(key)}{_PAIR_SEPARATOR}{_b64encode(value)}" for key, value in values.items()
    )


def decode_state_id(state_id: str) -> dict[str, str]:
    """Decode a resource id token produced by ``encode_state_id``.

    Raises:
        IdentityDecodeError: If the token is not a valid encoding.
    """
    if not state_id:
        return {}

    decoded: dict[str, str] = {}
    for entry in state_id.split(_ENTRY_SEPARATOR):
        key_b64, sep, value_b64 = entry.partition(_PAIR_SEPARATOR)
        if not sep:
            msg = f"Malformed resource id entry {entry!r}: missing {_PAIR_SEPARATOR!r}"
            raise IdentityDecodeError(msg, resource_id=state_id)
        key = _b64decode(key_b64, state_id)
        if key in decoded:
            msg = f"Duplicate identity key {key!r} in resource id"
            raise IdentityDecodeError(msg, resource_id=state_id)
        decoded[key] = _b64decode(value_b64, state_id)
    return decoded


def is_encoded_state_id(candidate: str) -> bool:
    """Return ``True`` if *candidate* decodes as a non-empty composite id."""
    try:
        return bool(decode_state_id(candidate))
    except IdentityDecodeError:
        return False


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _b64decode(token: str, state_id: str) -> str:
    try:
        return base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        msg = f"Malformed resource id component {token!r}: {exc}"
        raise IdentityDecodeError(msg, resource_id=state_id) from exc
