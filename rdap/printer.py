"""Human readable, WHOIS-like text output of RDAP response objects."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, TextIO

from .models import (
    Autnum,
    DecodeData,
    Domain,
    DomainSearchResults,
    DSData,
    Entity,
    EntitySearchResults,
    ErrorResponse,
    Event,
    Help,
    IPAddressSet,
    IPNetwork,
    KeyData,
    Link,
    Nameserver,
    NameserverSearchResults,
    Notice,
    PublicID,
    Remark,
    SecureDNS,
    Variant,
    VariantName,
)
from .vcard import format_number

_BAD_CHARS = str.maketrans("", "", "\n\r\0")


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class Printer:
    """Writes RDAP objects as indented text, one nested object per level.

    writer defaults to standard output. brief_output leaves out conformance,
    notices, remarks, events, port43, variants and secure DNS data;
    brief_links prints each link as a single line.
    """

    writer: TextIO | None = None
    indent_char: str = " "
    indent_size: int = 2
    omit_notices: bool = False
    omit_remarks: bool = False
    brief_output: bool = False
    brief_links: bool = False

    def print(self, obj: Any) -> None:
        """Write obj; objects of unknown types are ignored."""
        if self.writer is None:
            self.writer = sys.stdout
        if not self.indent_size:
            self.indent_size = 2
        if not self.indent_char or self.indent_char == "\0":
            self.indent_char = " "
        self._print_object(obj, 0)

    @property
    def _show_notices(self) -> bool:
        return not self.brief_output or self.omit_notices

    @property
    def _show_remarks(self) -> bool:
        return not self.brief_output or self.omit_remarks

    def _print_object(self, obj: Any, level: int) -> None:
        printers: dict[type, Callable[[Any, int], None]] = {
            Domain: self._print_domain,
            Entity: self._print_entity,
            Nameserver: self._print_nameserver,
            Autnum: self._print_autnum,
            IPNetwork: self._print_ip_network,
            Help: self._print_help,
            ErrorResponse: self._print_error,
            DomainSearchResults: self._print_domain_search_results,
            EntitySearchResults: self._print_entity_search_results,
            NameserverSearchResults: self._print_nameserver_search_results,
        }
        handler = printers.get(type(obj))
        if handler is not None:
            handler(obj, level)

    def _print_common_header(self, obj: Any, level: int) -> None:
        if not self.brief_output:
            for c in obj.conformance:
                self._value("Conformance", c, level)
        if self._show_notices:
            for n in obj.notices:
                self._print_notice(n, level)

    def _print_domain_search_results(self, sr: DomainSearchResults, level: int) -> None:
        self._heading("Domain Search Results", level)
        level += 1
        self._print_common_header(sr, level)
        for d in sr.domains:
            self._print_domain(d, level)
        self._print_unknowns(sr.decode_data, level)

    def _print_entity_search_results(self, sr: EntitySearchResults, level: int) -> None:
        self._heading("Entity Search Results", level)
        level += 1
        self._print_common_header(sr, level)
        for e in sr.entities:
            self._print_entity(e, level)
        self._print_unknowns(sr.decode_data, level)

    def _print_nameserver_search_results(
        self, sr: NameserverSearchResults, level: int
    ) -> None:
        self._heading("Nameserver Search Results", level)
        level += 1
        self._print_common_header(sr, level)
        for n in sr.nameservers:
            self._print_nameserver(n, level)
        self._print_unknowns(sr.decode_data, level)

    def _print_error(self, e: ErrorResponse, level: int) -> None:
        self._heading("Error", level)
        level += 1
        self._print_common_header(e, level)
        if e.error_code is not None:
            self._value("Error Code", str(e.error_code), level)
        self._value("Title", e.title, level)
        for d in e.description:
            self._value("Description", d, level)
        self._print_unknowns(e.decode_data, level)

    def _print_help(self, h: Help, level: int) -> None:
        self._heading("Help", level)
        level += 1
        self._print_common_header(h, level)
        self._print_unknowns(h.decode_data, level)

    def _print_domain(self, d: Domain, level: int) -> None:
        self._heading("Domain", level)
        level += 1
        self._value("Domain Name", d.ldh_name, level)
        self._value("Domain Name (Unicode)", d.unicode_name, level)
        self._value("Handle", d.handle, level)
        for s in d.status:
            self._value("Status", s, level)
        if not self.brief_output:
            self._value("Port43", d.port43, level)
        for pid in d.public_ids:
            self._print_public_id(pid, level)
        self._print_common_header(d, level)
        if self._show_remarks:
            for r in d.remarks:
                self._print_remark(r, level)
        for link in d.links:
            self._print_link(link, level)
        if not self.brief_output:
            for e in d.events:
                self._print_event(e, level, False)
            for v in d.variants:
                self._print_variant(v, level)
            if d.secure_dns is not None:
                self._print_secure_dns(d.secure_dns, level)
        for e in d.entities:
            self._print_entity(e, level)
        for n in d.nameservers:
            self._print_nameserver(n, level)
        if d.network is not None:
            self._print_ip_network(d.network, level)
        self._print_unknowns(d.decode_data, level)

    def _print_autnum(self, a: Autnum, level: int) -> None:
        self._heading("Autnum", level)
        level += 1
        self._value("Handle", a.handle, level)
        self._value("Name", a.name, level)
        self._value("Type", a.type, level)
        for s in a.status:
            self._value("Status", s, level)
        self._value("IP Version", a.ip_version, level)
        self._value("Country", a.country, level)
        if a.start_autnum is not None:
            self._value("StartAutnum", str(a.start_autnum), level)
        if a.end_autnum is not None:
            self._value("EndAutnum", str(a.end_autnum), level)
        if not self.brief_output:
            for c in a.conformance:
                self._value("Conformance", c, level)
            self._value("Port43", a.port43, level)
        if self._show_notices:
            for n in a.notices:
                self._print_notice(n, level)
        if self._show_remarks:
            for r in a.remarks:
                self._print_remark(r, level)
        for link in a.links:
            self._print_link(link, level)
        if not self.brief_output:
            for e in a.events:
                self._print_event(e, level, False)
        for e in a.entities:
            self._print_entity(e, level)
        self._print_unknowns(a.decode_data, level)

    def _print_nameserver(self, n: Nameserver, level: int) -> None:
        self._heading("Nameserver", level)
        level += 1
        self._value("Nameserver", n.ldh_name, level)
        self._value("Nameserver (Unicode)", n.unicode_name, level)
        self._value("Handle", n.handle, level)
        for s in n.status:
            self._value("Status", s, level)
        if not self.brief_output:
            self._value("Port43", n.port43, level)
        self._print_common_header(n, level)
        if self._show_remarks:
            for r in n.remarks:
                self._print_remark(r, level)
        for link in n.links:
            self._print_link(link, level)
        if not self.brief_output:
            for e in n.events:
                self._print_event(e, level, False)
        if n.ip_addresses is not None:
            self._print_ip_address_set(n.ip_addresses, level)
        for e in n.entities:
            self._print_entity(e, level)
        self._print_unknowns(n.decode_data, level)

    def _print_ip_address_set(self, s: IPAddressSet, level: int) -> None:
        self._heading("IP Addresses", level)
        level += 1
        for ip in s.v6:
            self._value("IPv6", ip, level)
        for ip in s.v4:
            self._value("IPv4", ip, level)
        self._print_unknowns(s.decode_data, level)

    def _print_entity(self, e: Entity, level: int) -> None:
        self._heading("Entity", level)
        level += 1
        self._value("Handle", e.handle, level)
        for s in e.status:
            self._value("Status", s, level)
        if not self.brief_output:
            self._value("Port43", e.port43, level)
        for pid in e.public_ids:
            self._print_public_id(pid, level)
        self._print_common_header(e, level)
        if self._show_remarks:
            for r in e.remarks:
                self._print_remark(r, level)
        for link in e.links:
            self._print_link(link, level)
        if not self.brief_output:
            for ev in e.events:
                self._print_event(ev, level, False)
            for ev in e.as_event_actor:
                self._print_event(ev, level, True)
        for role in e.roles:
            self._value("Role", role, level)
        if e.vcard is not None:
            for prop in e.vcard.properties:
                for text in prop.values():
                    self._value("vCard " + prop.name, text, level)
        if not self.brief_output:
            for network in e.networks:
                self._print_ip_network(network, level)
            for autnum in e.autnums:
                self._print_autnum(autnum, level)
            for child in e.entities:
                self._print_entity(child, level)
        self._print_unknowns(e.decode_data, level)

    def _print_ip_network(self, n: IPNetwork, level: int) -> None:
        self._heading("IP Network", level)
        level += 1
        self._value("Handle", n.handle, level)
        self._value("Start Address", n.start_address, level)
        self._value("End Address", n.end_address, level)
        self._value("IP Version", n.ip_version, level)
        self._value("Name", n.name, level)
        self._value("Type", n.type, level)
        self._value("Country", n.country, level)
        self._value("ParentHandle", n.parent_handle, level)
        for s in n.status:
            self._value("Status", s, level)
        if not self.brief_output:
            self._value("Port43", n.port43, level)
        if self._show_notices:
            for notice in n.notices:
                self._print_notice(notice, level)
        if self._show_remarks:
            for r in n.remarks:
                self._print_remark(r, level)
        for e in n.entities:
            self._print_entity(e, level)
        for link in n.links:
            self._print_link(link, level)
        if not self.brief_output:
            for ev in n.events:
                self._print_event(ev, level, False)
        self._print_unknowns(n.decode_data, level)

    def _print_public_id(self, pid: PublicID, level: int) -> None:
        self._heading("Public ID", level)
        level += 1
        self._value("Type", pid.type, level)
        self._value("Identifier", pid.identifier, level)
        self._print_unknowns(pid.decode_data, level)

    def _print_secure_dns(self, s: SecureDNS, level: int) -> None:
        self._heading("Secure DNS", level)
        level += 1
        if s.zone_signed is not None:
            self._value("Zone Signed", _bool_text(s.zone_signed), level)
        if s.delegation_signed is not None:
            self._value("Delegation Signed", _bool_text(s.delegation_signed), level)
        if s.max_sig_life is not None:
            self._value("Max Signature Life", str(s.max_sig_life), level)
        for ds in s.ds:
            self._print_ds_data(ds, level)
        for key in s.keys:
            self._print_key_data(key, level)
        self._print_unknowns(s.decode_data, level)

    def _print_key_data(self, k: KeyData, level: int) -> None:
        self._heading("Key", level)
        level += 1
        if k.flags is not None:
            self._value("Flags", str(k.flags), level)
        if k.protocol is not None:
            self._value("Protocol", str(k.protocol), level)
        if k.algorithm is not None:
            self._value("Algorithm", str(k.algorithm), level)
        self._value("Public Key", k.public_key, level)
        if not self.brief_output:
            for e in k.events:
                self._print_event(e, level, False)
        for link in k.links:
            self._print_link(link, level)
        self._print_unknowns(k.decode_data, level)

    def _print_ds_data(self, d: DSData, level: int) -> None:
        self._heading("DSData", level)
        level += 1
        if d.key_tag is not None:
            self._value("Key Tag", str(d.key_tag), level)
        if d.algorithm is not None:
            self._value("Algorithm", str(d.algorithm), level)
        self._value("Digest", d.digest, level)
        if d.digest_type is not None:
            self._value("DigestType", str(d.digest_type), level)
        if not self.brief_output:
            for e in d.events:
                self._print_event(e, level, False)
        for link in d.links:
            self._print_link(link, level)
        self._print_unknowns(d.decode_data, level)

    def _print_variant(self, v: Variant, level: int) -> None:
        self._heading("Variant", level)
        level += 1
        for r in v.relation:
            self._value("Relation", r, level)
        self._value("IDN Table", v.idn_table, level)
        for vn in v.variant_names:
            self._print_variant_name(vn, level)
        self._print_unknowns(v.decode_data, level)

    def _print_variant_name(self, vn: VariantName, level: int) -> None:
        self._heading("Variant Name", level)
        level += 1
        self._value("Domain Name", vn.ldh_name, level)
        self._value("Domain Name (Unicode)", vn.unicode_name, level)
        self._print_unknowns(vn.decode_data, level)

    def _print_text_block(self, heading: str, block: Notice | Remark, level: int) -> None:
        self._heading(heading, level)
        level += 1
        self._value("Title", block.title, level)
        self._value("Type", block.type, level)
        for d in block.description:
            self._value("Description", d, level)
        for link in block.links:
            self._print_link(link, level)
        self._print_unknowns(block.decode_data, level)

    def _print_remark(self, r: Remark, level: int) -> None:
        self._print_text_block("Remark", r, level)

    def _print_notice(self, n: Notice, level: int) -> None:
        self._print_text_block("Notice", n, level)

    def _print_link(self, link: Link, level: int) -> None:
        if self.brief_links:
            self._value("Link", link.href, level)
            return
        self._heading("Link", level)
        level += 1
        self._value("Title", link.title, level)
        self._value("Href", link.href, level)
        self._value("Value", link.value, level)
        self._value("Rel", link.rel, level)
        self._value("Media", link.media, level)
        self._value("Type", link.type, level)
        for lang in link.href_lang:
            self._value("HrefLang", lang, level)
        self._print_unknowns(link.decode_data, level)

    def _print_event(self, e: Event, level: int, as_event_actor: bool) -> None:
        if self.brief_output:
            return
        self._heading("AsEventActor" if as_event_actor else "Event", level)
        level += 1
        self._value("Action", e.action, level)
        self._value("Actor", e.actor, level)
        self._value("Date", e.date, level)
        for link in e.links:
            self._print_link(link, level)
        self._print_unknowns(e.decode_data, level)

    def _print_unknowns(self, data: DecodeData | None, level: int) -> None:
        if data is None:
            return
        for key, value in data.values.items():
            if key not in data.known or key in data.overridden:
                self._print_unknown(key, value, level)

    def _print_unknown(self, key: str, value: Any, level: int) -> None:
        if isinstance(value, bool):
            self._value(key, _bool_text(value), level)
        elif isinstance(value, (int, float)):
            self._value(key, format_number(value), level)
        elif isinstance(value, str):
            self._value(key, value, level)
        elif isinstance(value, list):
            for item in value:
                self._print_unknown(key, item, level)
        elif isinstance(value, dict):
            self._heading(key, level)
            for inner_key, inner_value in value.items():
                self._print_unknown(inner_key, inner_value, level + 1)
        else:
            self._value(key, "[unprintable value]", level)

    def _indent(self, level: int) -> str:
        return self.indent_char * (level * self.indent_size)

    def _heading(self, heading: str, level: int) -> None:
        self.writer.write(f"{self._indent(level)}{_clean(heading)}:\n")

    def _value(self, name: str, value: str, level: int) -> None:
        if value == "":
            return
        self.writer.write(f"{self._indent(level)}{_clean(name)}: {_clean(value)}\n")


def _clean(text: str) -> str:
    return text.translate(_BAD_CHARS)