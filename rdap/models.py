"""RDAP response objects (RFC 7483) and the field descriptions used to decode them.

Each model is a dataclass whose RDAP fields carry their JSON member name and
a kind describing the expected value, see rdap_field().
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Any

from .vcard import VCard


@dataclass(frozen=True)
class IntKind:
    """An integer field with an allowed range."""

    minimum: int
    maximum: int

    def accepts(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum


UINT8 = IntKind(0, 2**8 - 1)
UINT16 = IntKind(0, 2**16 - 1)
UINT32 = IntKind(0, 2**32 - 1)
UINT64 = IntKind(0, 2**64 - 1)
INT8 = IntKind(-(2**7), 2**7 - 1)
INT16 = IntKind(-(2**15), 2**15 - 1)
INT32 = IntKind(-(2**31), 2**31 - 1)
INT64 = IntKind(-(2**63), 2**63 - 1)


@dataclass(frozen=True)
class ListKind:
    """A JSON array whose items have the given kind."""

    item: Any


@dataclass(frozen=True)
class MapKind:
    """A JSON object with string keys whose values have the given kind."""

    item: Any


@dataclass(frozen=True)
class OptionalKind:
    """A value of the given kind that is None until present."""

    item: Any


_MODELS: dict[str, type] = {}


def _model(cls: type) -> type:
    cls = dataclass(cls)
    _MODELS[cls.__name__] = cls
    return cls


def resolve_kind(kind: Any) -> Any:
    """Return kind, with a model named by a string replaced by its class."""
    if isinstance(kind, str):
        try:
            return _MODELS[kind]
        except KeyError:
            raise LookupError(f"unknown RDAP model {kind!r}") from None
    return kind


def _default_for(kind: Any) -> dict[str, Any]:
    if kind is str:
        return {"default": ""}
    if kind is bool:
        return {"default": False}
    if kind is float:
        return {"default": 0.0}
    if isinstance(kind, IntKind):
        return {"default": 0}
    if isinstance(kind, ListKind):
        return {"default_factory": list}
    if isinstance(kind, MapKind):
        return {"default_factory": dict}
    if isinstance(kind, OptionalKind) or kind is VCard:
        return {"default": None}
    if isinstance(kind, type) and dataclasses.is_dataclass(kind):
        return {"default_factory": kind}
    raise TypeError(f"unsupported RDAP field kind {kind!r}")


def rdap_field(name: str, kind: Any = str, default: Any = dataclasses.MISSING) -> Any:
    """Declare a dataclass field decoded from the RDAP member called name."""
    metadata = {"rdap": name, "kind": kind}
    if default is dataclasses.MISSING:
        return field(metadata=metadata, **_default_for(kind))
    if isinstance(default, (list, dict, set)):
        return field(metadata=metadata, default_factory=lambda: copy.deepcopy(default))
    return field(metadata=metadata, default=default)


def rdap_fields(cls: type) -> dict[str, dataclasses.Field]:
    """Map RDAP member names to the dataclass fields of cls that hold them."""
    result: dict[str, dataclasses.Field] = {}
    for f in dataclasses.fields(cls):
        name = f.metadata.get("rdap")
        if name is None:
            continue
        if name in result:
            raise ValueError(f"duplicate RDAP field {name!r} in {cls.__name__}")
        result[name] = f
    return result


@dataclass
class DecodeData:
    """Raw member values and decoding notes kept alongside a decoded object."""

    values: dict[str, Any] = field(default_factory=dict)
    known: set[str] = field(default_factory=set)
    overridden: set[str] = field(default_factory=set)
    messages: dict[str, list[str]] = field(default_factory=dict)

    def notes(self, key: str) -> list[str]:
        """Notes (conversions, minor errors) recorded for the member key."""
        return list(self.messages.get(key, []))

    def add_note(self, key: str, message: str) -> None:
        self.messages.setdefault(key, []).append(message)

    def fields(self) -> list[str]:
        """Names of every member present in the decoded JSON object."""
        return list(self.values)

    def unknown_fields(self) -> list[str]:
        """Names of members that no model field describes."""
        return [key for key in self.values if key not in self.known]

    def value(self, key: str) -> Any:
        """The raw JSON value of the member key, or None."""
        return self.values.get(key)


def _decode_data() -> Any:
    return field(default=None, compare=False, repr=False)


_STRINGS = ListKind(str)


@_model
class Link:
    decode_data: DecodeData | None = _decode_data()
    value: str = rdap_field("value")
    rel: str = rdap_field("rel")
    href: str = rdap_field("href")
    href_lang: list[str] = rdap_field("hreflang", _STRINGS)
    title: str = rdap_field("title")
    media: str = rdap_field("media")
    type: str = rdap_field("type")


@_model
class Event:
    decode_data: DecodeData | None = _decode_data()
    action: str = rdap_field("eventAction")
    actor: str = rdap_field("eventActor")
    date: str = rdap_field("eventDate")
    links: list[Link] = rdap_field("links", ListKind(Link))


@_model
class Notice:
    decode_data: DecodeData | None = _decode_data()
    title: str = rdap_field("title")
    type: str = rdap_field("type")
    description: list[str] = rdap_field("description", _STRINGS)
    links: list[Link] = rdap_field("links", ListKind(Link))


@_model
class Remark:
    decode_data: DecodeData | None = _decode_data()
    title: str = rdap_field("title")
    type: str = rdap_field("type")
    description: list[str] = rdap_field("description", _STRINGS)
    links: list[Link] = rdap_field("links", ListKind(Link))


@_model
class PublicID:
    decode_data: DecodeData | None = _decode_data()
    type: str = rdap_field("type")
    identifier: str = rdap_field("identifier")


@_model
class VariantName:
    decode_data: DecodeData | None = _decode_data()
    ldh_name: str = rdap_field("ldhName")
    unicode_name: str = rdap_field("unicodeName")


@_model
class Variant:
    decode_data: DecodeData | None = _decode_data()
    relation: list[str] = rdap_field("relation", _STRINGS)
    idn_table: str = rdap_field("idnTable")
    variant_names: list[VariantName] = rdap_field("variantNames", ListKind(VariantName))


@_model
class DSData:
    decode_data: DecodeData | None = _decode_data()
    key_tag: int | None = rdap_field("keyTag", OptionalKind(UINT64))
    algorithm: int | None = rdap_field("algorithm", OptionalKind(UINT8))
    digest: str = rdap_field("digest")
    digest_type: int | None = rdap_field("digestType", OptionalKind(UINT8))
    events: list[Event] = rdap_field("events", ListKind(Event))
    links: list[Link] = rdap_field("links", ListKind(Link))


@_model
class KeyData:
    decode_data: DecodeData | None = _decode_data()
    flags: int | None = rdap_field("flags", OptionalKind(UINT16))
    protocol: int | None = rdap_field("protocol", OptionalKind(UINT8))
    algorithm: int | None = rdap_field("algorithm", OptionalKind(UINT8))
    public_key: str = rdap_field("publicKey")
    events: list[Event] = rdap_field("events", ListKind(Event))
    links: list[Link] = rdap_field("links", ListKind(Link))


@_model
class SecureDNS:
    decode_data: DecodeData | None = _decode_data()
    zone_signed: bool | None = rdap_field("zoneSigned", OptionalKind(bool))
    delegation_signed: bool | None = rdap_field("delegationSigned", OptionalKind(bool))
    max_sig_life: int | None = rdap_field("maxSigLife", OptionalKind(UINT64))
    ds: list[DSData] = rdap_field("dsData", ListKind(DSData))
    keys: list[KeyData] = rdap_field("keyData", ListKind(KeyData))


@_model
class IPAddressSet:
    decode_data: DecodeData | None = _decode_data()
    v6: list[str] = rdap_field("v6", _STRINGS)
    v4: list[str] = rdap_field("v4", _STRINGS)


@_model
class Entity:
    """An organisation or person. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    object_class_name: str = rdap_field("objectClassName")
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    handle: str = rdap_field("handle")
    vcard: VCard | None = rdap_field("vcardArray", OptionalKind(VCard))
    roles: list[str] = rdap_field("roles", _STRINGS)
    public_ids: list[PublicID] = rdap_field("publicIds", ListKind(PublicID))
    entities: list[Entity] = rdap_field("entities", ListKind("Entity"))
    remarks: list[Remark] = rdap_field("remarks", ListKind(Remark))
    links: list[Link] = rdap_field("links", ListKind(Link))
    events: list[Event] = rdap_field("events", ListKind(Event))
    as_event_actor: list[Event] = rdap_field("asEventActor", ListKind(Event))
    status: list[str] = rdap_field("status", _STRINGS)
    port43: str = rdap_field("port43")
    networks: list[IPNetwork] = rdap_field("networks", ListKind("IPNetwork"))
    autnums: list[Autnum] = rdap_field("autnums", ListKind("Autnum"))


@_model
class IPNetwork:
    """An IP network. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    object_class_name: str = rdap_field("objectClassName")
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    handle: str = rdap_field("handle")
    start_address: str = rdap_field("startAddress")
    end_address: str = rdap_field("endAddress")
    ip_version: str = rdap_field("ipVersion")
    name: str = rdap_field("name")
    type: str = rdap_field("type")
    country: str = rdap_field("country")
    parent_handle: str = rdap_field("parentHandle")
    status: list[str] = rdap_field("status", _STRINGS)
    entities: list[Entity] = rdap_field("entities", ListKind(Entity))
    remarks: list[Remark] = rdap_field("remarks", ListKind(Remark))
    links: list[Link] = rdap_field("links", ListKind(Link))
    port43: str = rdap_field("port43")
    events: list[Event] = rdap_field("events", ListKind(Event))


@_model
class Autnum:
    """A range of autonomous system numbers. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    object_class_name: str = rdap_field("objectClassName")
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    handle: str = rdap_field("handle")
    start_autnum: int | None = rdap_field("startAutnum", OptionalKind(UINT32))
    end_autnum: int | None = rdap_field("endAutnum", OptionalKind(UINT32))
    ip_version: str = rdap_field("ipVersion")
    name: str = rdap_field("name")
    type: str = rdap_field("type")
    status: list[str] = rdap_field("status", _STRINGS)
    country: str = rdap_field("country")
    entities: list[Entity] = rdap_field("entities", ListKind(Entity))
    remarks: list[Remark] = rdap_field("remarks", ListKind(Remark))
    links: list[Link] = rdap_field("links", ListKind(Link))
    port43: str = rdap_field("port43")
    events: list[Event] = rdap_field("events", ListKind(Event))


@_model
class Nameserver:
    """A DNS nameserver. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    object_class_name: str = rdap_field("objectClassName")
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    handle: str = rdap_field("handle")
    ldh_name: str = rdap_field("ldhName")
    unicode_name: str = rdap_field("unicodeName")
    ip_addresses: IPAddressSet | None = rdap_field("ipAddresses", OptionalKind(IPAddressSet))
    entities: list[Entity] = rdap_field("entities", ListKind(Entity))
    status: list[str] = rdap_field("status", _STRINGS)
    remarks: list[Remark] = rdap_field("remarks", ListKind(Remark))
    links: list[Link] = rdap_field("links", ListKind(Link))
    port43: str = rdap_field("port43")
    events: list[Event] = rdap_field("events", ListKind(Event))


@_model
class Domain:
    """A DNS name and point of delegation. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    object_class_name: str = rdap_field("objectClassName")
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    handle: str = rdap_field("handle")
    ldh_name: str = rdap_field("ldhName")
    unicode_name: str = rdap_field("unicodeName")
    variants: list[Variant] = rdap_field("variants", ListKind(Variant))
    nameservers: list[Nameserver] = rdap_field("nameservers", ListKind(Nameserver))
    secure_dns: SecureDNS | None = rdap_field("secureDNS", OptionalKind(SecureDNS))
    entities: list[Entity] = rdap_field("entities", ListKind(Entity))
    status: list[str] = rdap_field("status", _STRINGS)
    public_ids: list[PublicID] = rdap_field("publicIds", ListKind(PublicID))
    remarks: list[Remark] = rdap_field("remarks", ListKind(Remark))
    links: list[Link] = rdap_field("links", ListKind(Link))
    port43: str = rdap_field("port43")
    events: list[Event] = rdap_field("events", ListKind(Event))
    network: IPNetwork | None = rdap_field("network", OptionalKind(IPNetwork))


@_model
class ErrorResponse:
    """An RDAP error response. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    error_code: int | None = rdap_field("errorCode", OptionalKind(UINT16))
    title: str = rdap_field("title")
    description: list[str] = rdap_field("description", _STRINGS)


@_model
class Help:
    """A help response. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))


@_model
class DomainSearchResults:
    """A domain search response. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    domains: list[Domain] = rdap_field("domainSearchResults", ListKind(Domain))


@_model
class NameserverSearchResults:
    """A nameserver search response. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    nameservers: list[Nameserver] = rdap_field("nameserverSearchResults", ListKind(Nameserver))


@_model
class EntitySearchResults:
    """An entity search response. A topmost RDAP response object."""

    decode_data: DecodeData | None = _decode_data()
    conformance: list[str] = rdap_field("rdapConformance", _STRINGS)
    notices: list[Notice] = rdap_field("notices", ListKind(Notice))
    entities: list[Entity] = rdap_field("entitySearchResults", ListKind(Entity))