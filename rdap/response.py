"""RDAP responses and their WHOIS-style summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import Domain, Entity


@dataclass
class HTTPResponse:
    """One HTTP exchange made while answering a request; duration in seconds."""

    url: str
    response: Any = None
    body: bytes = b""
    error: Exception | None = None
    duration: float = 0.0


@dataclass
class WhoisStyleResponse:
    """Key/value data in the style of a WHOIS reply, keys in display order."""

    key_display_order: list[str] = field(default_factory=list)
    data: dict[str, list[str]] = field(default_factory=dict)

    def add(self, key: str, value: str) -> None:
        """Append value under key; empty values are ignored."""
        if not value:
            return
        if key not in self.data:
            self.key_display_order.append(key)
            self.data[key] = []
        self.data[key].append(value)


_EVENT_KEYS = {
    "last changed": "Updated Date",
    "registration": "Creation Date",
    "expiration": "Expiration Date",
}


def _find_first_entity(role: str, entities: list[Entity]) -> Entity | None:
    return next((e for e in entities if role in e.roles), None)


def _add_entity_fields(w: WhoisStyleResponse, label: str, entity: Entity | None) -> None:
    if entity is None or entity.vcard is None:
        return
    v = entity.vcard
    w.add(f"{label} Name", v.name())
    w.add(f"{label} PO Box", v.po_box())
    w.add(f"{label} Extended Address", v.extended_address())
    w.add(f"{label} Street", v.street_address())
    w.add(f"{label} Locality", v.locality())
    w.add(f"{label} Post Code", v.postal_code())
    w.add(f"{label} Country", v.country())
    w.add(f"{label} Tel", v.tel())
    w.add(f"{label} Fax", v.fax())
    w.add(f"{label} Email", v.email())


@dataclass
class Response:
    """The decoded RDAP object with the HTTP exchanges that produced it."""

    object: Any = None
    bootstrap_answer: Any = None
    http: list[HTTPResponse] = field(default_factory=list)

    def to_whois_style_response(self) -> WhoisStyleResponse:
        """Summarise the response WHOIS-style. Only domains are supported."""
        w = WhoisStyleResponse()

        d = self.object
        if not isinstance(d, Domain):
            return w

        w.add("Domain Name", d.ldh_name)
        w.add("Handle", d.handle)
        w.add("Registrar WHOIS Server", d.port43)

        for event in d.events:
            key = _EVENT_KEYS.get(event.action)
            if key is not None:
                w.add(key, event.date)

        registrar = _find_first_entity("registrar", d.entities)
        if registrar is not None:
            if registrar.vcard is not None:
                w.add("Registrar", registrar.vcard.name())
            for public_id in registrar.public_ids:
                if public_id.type == "IANA Registrar ID":
                    w.add("Registrar IANA ID", public_id.identifier)

        for status in d.status:
            w.add("Domain Status", status)

        _add_entity_fields(w, "Registrant", _find_first_entity("registrant", d.entities))
        _add_entity_fields(w, "Admin", _find_first_entity("administrative", d.entities))
        _add_entity_fields(w, "Tech", _find_first_entity("technical", d.entities))
        _add_entity_fields(w, "Abuse", _find_first_entity("abuse", d.entities))

        for nameserver in d.nameservers:
            w.add("Name Server", nameserver.ldh_name)

        return w