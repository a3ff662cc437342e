"""RDAP requests (RFC 7482) and construction of their URLs."""

from __future__ import annotations

import dataclasses
import ipaddress
import re
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlencode, urlsplit, urlunsplit


class RequestType(Enum):
    """The kind of an RDAP request."""

    AUTNUM = "autnum"
    DOMAIN = "domain"
    ENTITY = "entity"
    HELP = "help"
    IP = "ip"
    NAMESERVER = "nameserver"

    DOMAIN_SEARCH = "domain-search"
    DOMAIN_SEARCH_BY_NAMESERVER = "domain-search-by-nameserver"
    DOMAIN_SEARCH_BY_NAMESERVER_IP = "domain-search-by-nameserver-ip"
    NAMESERVER_SEARCH = "nameserver-search"
    NAMESERVER_SEARCH_BY_NAMESERVER_IP = "nameserver-search-by-ip"
    ENTITY_SEARCH = "entity-search"
    ENTITY_SEARCH_BY_HANDLE = "entity-search-by-handle"

    # A request for a fixed RDAP URL.
    RAW = "url"

    def __str__(self) -> str:
        return self.value


_LOOKUP_PATHS: dict[RequestType, str] = {
    RequestType.AUTNUM: "autnum",
    RequestType.DOMAIN: "domain",
    RequestType.ENTITY: "entity",
    RequestType.NAMESERVER: "nameserver",
}

_SEARCHES: dict[RequestType, tuple[str, str]] = {
    RequestType.DOMAIN_SEARCH: ("domains", "name"),
    RequestType.DOMAIN_SEARCH_BY_NAMESERVER: ("domains", "nsLdhName"),
    RequestType.DOMAIN_SEARCH_BY_NAMESERVER_IP: ("domains", "nsIp"),
    RequestType.NAMESERVER_SEARCH: ("nameservers", "name"),
    RequestType.NAMESERVER_SEARCH_BY_NAMESERVER_IP: ("nameservers", "ip"),
    RequestType.ENTITY_SEARCH: ("entities", "fn"),
    RequestType.ENTITY_SEARCH_BY_HANDLE: ("entities", "handle"),
}

_PATH_SAFE = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~$&+:=@"
)

_UINT32_MAX = 2**32 - 1
_DIGITS = re.compile(r"[0-9]+")


def _escape_path(text: str) -> str:
    return "".join(
        chr(byte) if byte in _PATH_SAFE else f"%{byte:02X}" for byte in text.encode("utf-8")
    )


@dataclass
class Request:
    """An RDAP request.

    server is the RDAP server's base URL; None leaves it to bootstrapping.
    For RequestType.RAW, server is the complete RDAP URL and query and params
    are not used. fetch_roles lists contact roles for which extra lookups may
    be made ("all" for every role); timeout is in seconds, None for none.
    """

    type: RequestType
    query: str = ""
    params: dict[str, list[str]] = field(default_factory=dict)
    server: str | None = None
    fetch_roles: list[str] = field(default_factory=list)
    timeout: float | None = None

    def _path_and_values(self) -> tuple[str, dict[str, list[str]]]:
        if self.type in _LOOKUP_PATHS:
            return f"{_LOOKUP_PATHS[self.type]}/{_escape_path(self.query)}", {}
        if self.type is RequestType.IP:
            return f"ip/{self.query}", {}
        if self.type is RequestType.HELP:
            return "help", {}
        if self.type in _SEARCHES:
            path, key = _SEARCHES[self.type]
            return path, {key: [self.query]}
        return "", {}

    def url(self) -> str | None:
        """Return the request URL, or None when no server is set.

        For RequestType.RAW the server URL is returned unchanged. Otherwise the
        server's own query string and fragment are not carried over.
        """
        if self.server is None:
            return None
        if self.type is RequestType.RAW:
            return self.server

        parts = urlsplit(self.server)
        base = urlunsplit(parts._replace(query="", fragment=""))
        if not base.endswith("/"):
            base += "/"

        path, values = self._path_and_values()
        query = {**self.params, **values}
        encoded = urlencode(sorted(query.items()), doseq=True)

        return base + path + (f"?{encoded}" if encoded else "")

    def with_server(self, server: str | None) -> Request:
        """Return a copy of the request with its server replaced."""
        return dataclasses.replace(self, server=server)


def help_request() -> Request:
    """A help request. The server must be set."""
    return Request(RequestType.HELP)


def autnum_request(asn: int) -> Request:
    """A request for the AS number asn."""
    if not 0 <= asn <= _UINT32_MAX:
        raise ValueError(f"AS number {asn} out of range")
    return Request(RequestType.AUTNUM, str(asn))


def ip_request(ip: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> Request:
    """A request for a single IP address."""
    return Request(RequestType.IP, str(ipaddress.ip_address(ip)))


def ip_net_request(net: str | ipaddress.IPv4Network | ipaddress.IPv6Network) -> Request:
    """A request for an IP network; host bits are masked off."""
    return Request(RequestType.IP, str(ipaddress.ip_network(net, strict=False)))


def domain_request(domain: str) -> Request:
    """A request for the domain name domain."""
    return Request(RequestType.DOMAIN, domain)


def entity_request(entity: str) -> Request:
    """A request for the entity handle entity. The server must be set."""
    return Request(RequestType.ENTITY, entity)


def nameserver_request(nameserver: str) -> Request:
    """A request for a nameserver. The server must be set."""
    return Request(RequestType.NAMESERVER, nameserver)


def raw_request(rdap_url: str) -> Request:
    """A request that fetches rdap_url as it stands."""
    return Request(RequestType.RAW, server=rdap_url)


def new_request(request_type: RequestType, query: str) -> Request:
    """A request of request_type with the given query text."""
    return Request(request_type, query)


def _parse_ip(text: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _parse_cidr(text: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network | None:
    address, slash, prefix = text.partition("/")
    if not slash or not _DIGITS.fullmatch(prefix) or _parse_ip(address) is None:
        return None
    try:
        return ipaddress.ip_network(text, strict=False)
    except ValueError:
        return None


def _parse_autnum(text: str) -> int | None:
    text = text.upper()
    if text.startswith("AS"):
        text = text[2:]
    if not _DIGITS.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _UINT32_MAX else None


def auto_request(query_text: str) -> Request:
    """Build a request, guessing its type from query_text.

    http(s) URLs become raw requests, or domain requests when they have no
    path; then IP addresses, IP networks, AS numbers (AS1234, as1234, 1234)
    and names containing a dot are recognised; anything else is an entity.
    """
    try:
        parts = urlsplit(query_text)
    except ValueError:
        parts = None
    if parts is not None and parts.scheme in ("http", "https"):
        if parts.path in ("", "/"):
            return domain_request(parts.netloc.rpartition("@")[2])
        return raw_request(query_text)

    ip = _parse_ip(query_text)
    if ip is not None:
        return ip_request(ip)

    net = _parse_cidr(query_text)
    if net is not None:
        return ip_net_request(net)

    asn = _parse_autnum(query_text)
    if asn is not None:
        return autnum_request(asn)

    if "." in query_text:
        return domain_request(query_text)

    return entity_request(query_text)