"""jCard (RFC 7095) decoding, as used for contact data in RDAP responses."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterator


class VCardError(ValueError):
    """A document is not a valid jCard."""

    def __init__(self, message: str) -> None:
        super().__init__(f"jCard error: {message}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def load_json(blob: str | bytes | bytearray) -> Any:
    """Parse strict JSON (no NaN or Infinity literals)."""
    return json.loads(blob, parse_constant=_reject_constant)


def format_number(value: int | float) -> str:
    """Format a JSON number as the shortest decimal text, without an exponent."""
    if isinstance(value, bool):
        raise TypeError("expected a number, got bool")
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _flatten(value: Any) -> Iterator[str]:
    if value is None:
        yield ""
    elif isinstance(value, bool):
        yield "true" if value else "false"
    elif isinstance(value, (int, float)):
        yield format_number(value)
    elif isinstance(value, str):
        yield value
    elif isinstance(value, list):
        for item in value:
            yield from _flatten(item)
    else:
        raise TypeError(f"unexpected jCard value type {type(value).__name__}")


def _debug_text(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, list):
        return "[" + " ".join(_debug_text(item) for item in value) + "]"
    if isinstance(value, dict):
        items = (f"{key}:{_debug_text(value[key])}" for key in sorted(value))
        return "map[" + " ".join(items) + "]"
    return str(value)


@dataclass
class VCardProperty:
    """A single jCard property: name, parameters, value type and value.

    The value is a string, number, bool, None, or a (possibly nested) list of
    these. Parameters always map to lists of strings.
    """

    name: str
    parameters: dict[str, list[str]] = field(default_factory=dict)
    type: str = ""
    value: Any = None

    def values(self) -> list[str]:
        """Return the value flattened into a list of strings."""
        return list(_flatten(self.value))

    def __str__(self) -> str:
        return (
            f"  {self.name} (type={self.type}, "
            f"parameters={_debug_text(self.parameters)}): {_debug_text(self.value)}"
        )


def _read_parameters(raw: Any) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        raise VCardError("jCard parameters invalid")

    params: dict[str, list[str]] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            params.setdefault(key, []).append(value)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, str):
                    params.setdefault(key, []).append(item)
    return params


def _read_value(value: Any, depth: int) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, list):
        if depth == 3:
            raise VCardError("Structured value too deep")
        return [_read_value(item, depth + 1) for item in value]
    raise VCardError("Unknown JSON datatype in jCard value")


def _decode_property(raw: Any) -> VCardProperty:
    if not isinstance(raw, list):
        raise VCardError("jCard property was not an array")
    if len(raw) < 4:
        raise VCardError("jCard property too short (>=4 array elements required)")

    name, raw_parameters, property_type = raw[:3]

    if not isinstance(name, str):
        raise VCardError("jCard property name invalid")

    parameters = _read_parameters(raw_parameters)

    if not isinstance(property_type, str):
        raise VCardError("jCard property type invalid")

    value = _read_value(raw[3] if len(raw) == 4 else raw[3:], 0)

    return VCardProperty(name=name, parameters=parameters, type=property_type, value=value)


@dataclass
class VCard:
    """A vCard in jCard form: an ordered list of properties."""

    properties: list[VCardProperty] = field(default_factory=list)

    @classmethod
    def from_json(
        cls, json_blob: str | bytes | bytearray, ignore_invalid_properties: bool = False
    ) -> VCard:
        """Decode a jCard JSON document.

        Any invalid property fails the whole decode unless
        ignore_invalid_properties is set, in which case it is skipped.
        """
        try:
            top = load_json(json_blob)
        except ValueError as exc:
            raise VCardError(f"invalid JSON: {exc}") from exc
        return cls.from_value(top, ignore_invalid_properties)

    @classmethod
    def from_value(cls, src: Any, ignore_invalid_properties: bool = False) -> VCard:
        """Decode an already parsed jCard structure."""
        if not isinstance(src, list) or len(src) != 2:
            raise VCardError("structure is not a jCard (expected len=2 top level array)")
        if src[0] != "vcard":
            raise VCardError("structure is not a jCard (missing 'vcard')")
        if not isinstance(src[1], list):
            raise VCardError("structure is not a jCard (bad properties array)")

        properties = []
        for raw in src[1]:
            try:
                properties.append(_decode_property(raw))
            except VCardError:
                if ignore_invalid_properties:
                    continue
                raise
        return cls(properties)

    def get(self, name: str) -> list[VCardProperty]:
        """Return all properties called name, in document order."""
        return [prop for prop in self.properties if prop.name == name]

    def get_first(self, name: str) -> VCardProperty | None:
        """Return the first property called name, or None."""
        return next((prop for prop in self.properties if prop.name == name), None)

    def _first_joined(self, name: str) -> str:
        prop = self.get_first(name)
        return "" if prop is None else " ".join(prop.values())

    def _address_field(self, index: int) -> str:
        adr = self.get_first("adr")
        if adr is None:
            return ""
        values = adr.values()
        return values[index] if index < len(values) else ""

    def name(self) -> str:
        """The formatted name, e.g. "John Smith"."""
        return self._first_joined("fn")

    def po_box(self) -> str:
        return self._address_field(0)

    def extended_address(self) -> str:
        """The extended address, e.g. an apartment or suite number."""
        return self._address_field(1)

    def street_address(self) -> str:
        return self._address_field(2)

    def locality(self) -> str:
        return self._address_field(3)

    def region(self) -> str:
        """The address region, e.g. state or province."""
        return self._address_field(4)

    def postal_code(self) -> str:
        return self._address_field(5)

    def country(self) -> str:
        """The full country name of the address."""
        return self._address_field(6)

    def tel(self) -> str:
        """The first voice telephone number, or an empty string."""
        for prop in self.get("tel"):
            types = prop.parameters.get("type")
            values = prop.values()
            if (types is None or "voice" in types) and values:
                return values[0]
        return ""

    def fax(self) -> str:
        """The first fax number, or an empty string."""
        for prop in self.get("tel"):
            types = prop.parameters.get("type")
            values = prop.values()
            if types is not None and "fax" in types and values:
                return values[0]
        return ""

    def email(self) -> str:
        return self._first_joined("email")

    def org(self) -> str:
        return self._first_joined("org")

    def __str__(self) -> str:
        return "vCard[\n" + "\n".join(str(prop) for prop in self.properties) + "\n]"