"""Best-effort decoding of RDAP JSON responses into the RDAP models.

Serious problems (bad JSON, an unrecognised objectClassName) raise
DecoderError. Minor problems such as type mismatches are recorded as notes in
the DecodeData of the enclosing object, and decoding carries on.
"""

from __future__ import annotations

import dataclasses
import math
import re
from typing import Any

from .models import (
    Autnum,
    DecodeData,
    Domain,
    DomainSearchResults,
    Entity,
    EntitySearchResults,
    ErrorResponse,
    Help,
    IntKind,
    IPNetwork,
    ListKind,
    MapKind,
    Nameserver,
    NameserverSearchResults,
    OptionalKind,
    rdap_fields,
    resolve_kind,
)
from .vcard import VCard, VCardError, format_number, load_json

_UNSET = object()

_OBJECT_CLASSES: dict[str, type] = {
    "autnum": Autnum,
    "domain": Domain,
    "entity": Entity,
    "ip network": IPNetwork,
    "nameserver": Nameserver,
}

_SEARCH_RESULTS: tuple[tuple[str, type], ...] = (
    ("domainSearchResults", DomainSearchResults),
    ("entitySearchResults", EntitySearchResults),
    ("nameserverSearchResults", NameserverSearchResults),
)

_BOOL_STRINGS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}

_UINT_TEXT = re.compile(r"[0-9]+")
_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_UINT64_MAX = 2**64 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class DecoderError(ValueError):
    """A fatal error encountered while decoding an RDAP response."""


def _is_model(kind: Any) -> bool:
    return isinstance(kind, type) and dataclasses.is_dataclass(kind)


def _note(decode_data: DecodeData | None, key: str, message: str) -> None:
    if decode_data is not None:
        decode_data.add_note(key, message)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_int(text: str, unsigned: bool) -> int:
    pattern = _UINT_TEXT if unsigned else _INT_TEXT
    if not pattern.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    result = int(text)
    low, high = (0, _UINT64_MAX) if unsigned else (_INT64_MIN, _INT64_MAX)
    if not low <= result <= high:
        raise ValueError(f"integer {text!r} out of range")
    return result


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid float {text!r}")
    result = float(text)
    if math.isinf(result) and "inf" not in text.lower():
        raise ValueError(f"float {text!r} out of range")
    return result


def _zero(kind: Any) -> Any:
    kind = resolve_kind(kind)
    if kind is str:
        return ""
    if kind is bool:
        return False
    if kind is float:
        return 0.0
    if isinstance(kind, IntKind):
        return 0
    if isinstance(kind, ListKind):
        return []
    if isinstance(kind, MapKind):
        return {}
    if _is_model(kind):
        return kind()
    return None


class Decoder:
    """Decodes one RDAP JSON document.

    target optionally fixes the model class to decode into; otherwise it is
    chosen from the document's contents.
    """

    def __init__(self, data: str | bytes | bytearray, target: type | None = None) -> None:
        self.data = data
        self.target = target

    def decode(self) -> Any:
        """Decode the document and return the resulting model object."""
        try:
            src = load_json(self.data)
        except ValueError as exc:
            raise DecoderError(f"invalid JSON: {exc}") from exc

        if src is None:
            src = {}
        if not isinstance(src, dict):
            raise DecoderError("JSON document is not an object")

        target = self.target if self.target is not None else self._choose_target(src)
        _, result = self._decode_model("", src, target, None)
        return result

    @staticmethod
    def _choose_target(src: dict[str, Any]) -> type:
        if "errorCode" in src:
            return ErrorResponse
        if "objectClassName" in src:
            name = src["objectClassName"]
            if not isinstance(name, str):
                raise DecoderError("objectClassName is not a string")
            try:
                return _OBJECT_CLASSES[name]
            except KeyError:
                raise DecoderError("objectClassName is not recognised") from None
        for member, cls in _SEARCH_RESULTS:
            if member in src:
                return cls
        return Help

    def _decode(
        self, key: str, src: Any, kind: Any, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        kind = resolve_kind(kind)
        if isinstance(kind, IntKind):
            return self._decode_int(key, src, kind, decode_data)
        if kind is float:
            return self._decode_float(key, src, decode_data)
        if kind is bool:
            return self._decode_bool(key, src, decode_data)
        if kind is str:
            return self._decode_string(key, src, decode_data)
        if isinstance(kind, ListKind):
            return self._decode_list(key, src, kind, decode_data)
        if isinstance(kind, MapKind):
            return self._decode_map(key, src, kind, decode_data)
        if isinstance(kind, OptionalKind):
            return self._decode_optional(key, src, kind, decode_data)
        if kind is VCard:
            return self._decode_vcard(key, src, decode_data)
        if _is_model(kind):
            return self._decode_model(key, src, kind, decode_data)
        raise TypeError(f"unsupported RDAP field kind {kind!r}")

    def _decode_int(
        self, key: str, src: Any, kind: IntKind, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        unsigned = kind.minimum == 0
        label = "uint" if unsigned else "int"

        if isinstance(src, bool):
            result = int(src)
            _note(decode_data, key, f"bool to {label} conversion")
        elif _is_number(src):
            result = int(src)
            _note(decode_data, key, f"float64 to {label} conversion")
        elif isinstance(src, str):
            try:
                result = _parse_int(src, unsigned)
            except ValueError:
                _note(decode_data, key, f"error converting string to {label}")
                return False, _UNSET
            _note(decode_data, key, f"string to {label} conversion")
        elif src is None:
            result = 0
            _note(decode_data, key, f"null to {label} conversion")
        else:
            _note(decode_data, key, "invalid JSON type, expecting float")
            return False, _UNSET

        if not kind.accepts(result):
            message = "error: number too large" if unsigned else "error: number too small or large"
            _note(decode_data, key, message)
            return False, _UNSET
        return True, result

    def _decode_float(
        self, key: str, src: Any, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        if isinstance(src, bool):
            _note(decode_data, key, "bool to float64 conversion")
            return True, 1.0 if src else 0.0
        if _is_number(src):
            return True, float(src)
        if isinstance(src, str):
            try:
                result = _parse_float(src)
            except ValueError:
                _note(decode_data, key, "error converting string to float64")
                return False, 0.0
            _note(decode_data, key, "string to float64 conversion")
            return True, result
        if src is None:
            _note(decode_data, key, "null to float64 conversion")
            return True, 0.0
        _note(decode_data, key, "invalid JSON type, expecting float")
        return False, 0.0

    def _decode_string(
        self, key: str, src: Any, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        if isinstance(src, bool):
            _note(decode_data, key, "bool to string conversion")
            return True, "true" if src else "false"
        if _is_number(src):
            _note(decode_data, key, "float64 to string conversion")
            return True, format_number(float(src))
        if isinstance(src, str):
            return True, src
        if src is None:
            _note(decode_data, key, "null to empty string conversion")
            return True, ""
        _note(decode_data, key, "invalid JSON type, expecting string")
        return False, ""

    def _decode_bool(
        self, key: str, src: Any, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        if isinstance(src, bool):
            return True, src
        if _is_number(src):
            _note(decode_data, key, "float64 to bool conversion")
            return True, src != 0
        if isinstance(src, str):
            if src not in _BOOL_STRINGS:
                _note(decode_data, key, "error converting string to bool")
                return False, False
            _note(decode_data, key, "string to bool conversion")
            return True, _BOOL_STRINGS[src]
        if src is None:
            _note(decode_data, key, "null to bool conversion")
            return True, False
        _note(decode_data, key, "invalid JSON type, expecting bool")
        return False, False

    def _decode_list(
        self, key: str, src: Any, kind: ListKind, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        if not isinstance(src, list):
            _note(decode_data, key, "invalid JSON type, expecting array")
            return False, _UNSET

        result = []
        for item in src:
            ok, value = self._decode(key, item, kind.item, decode_data)
            if ok:
                result.append(value)
        return True, result

    def _decode_map(
        self, key: str, src: Any, kind: MapKind, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        if not isinstance(src, dict):
            _note(decode_data, key, "invalid JSON type, expecting object")
            return False, _UNSET

        result = {}
        for name, item in src.items():
            ok, value = self._decode(f"{key}:{name}", item, kind.item, decode_data)
            if ok:
                result[name] = value
        return True, result

    def _decode_optional(
        self, key: str, src: Any, kind: OptionalKind, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        item = resolve_kind(kind.item)
        if item is VCard:
            return self._decode_vcard(key, src, decode_data)
        ok, value = self._decode(key, src, item, decode_data)
        if value is _UNSET:
            value = _zero(item)
        return ok, value

    def _decode_vcard(
        self, key: str, src: Any, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        try:
            return True, VCard.from_value(src)
        except VCardError as exc:
            _note(decode_data, key, str(exc))
            return False, _UNSET

    def _decode_model(
        self, key: str, src: Any, kind: type, decode_data: DecodeData | None
    ) -> tuple[bool, Any]:
        if not isinstance(src, dict):
            _note(decode_data, key, "invalid JSON type, expecting object")
            return False, _UNSET

        result = kind()
        fields = rdap_fields(kind)

        own_data: DecodeData | None = None
        if any(f.name == "decode_data" for f in dataclasses.fields(kind)):
            own_data = DecodeData(values=dict(src), known=set(fields))
            result.decode_data = own_data

        for name, raw in src.items():
            f = fields.get(name)
            if f is None:
                continue
            _, value = self._decode(name, raw, f.metadata["kind"], own_data)
            if value is not _UNSET:
                setattr(result, f.name, value)

        return True, result


def decode(data: str | bytes | bytearray) -> Any:
    """Decode an RDAP JSON document into the matching model object."""
    return Decoder(data).decode()