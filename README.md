# rdap

A library for the Registration Data Access Protocol (RDAP), the structured
successor to WHOIS. It decodes RDAP JSON responses into Python dataclasses,
builds RDAP request URLs, reads jCard contact data, and writes responses as
indented, WHOIS-like text.

## Installation

```
pip install .
```

With the test requirements:

```
pip install .[test]
pytest
```

## Decoding a response (`rdap.decoder`)

```python
from rdap.decoder import decode
from rdap.models import Domain

blob = b'''
{
  "objectClassName": "domain",
  "rdapConformance": ["rdap_level_0"],
  "handle": "EXAMPLECOM",
  "ldhName": "example.com",
  "entities": []
}
'''

result = decode(blob)
if isinstance(result, Domain):
    print(result.ldh_name)
```

The class of the result follows the document:

- `ErrorResponse` when it has an `errorCode` member;
- `Autnum`, `Domain`, `Entity`, `IPNetwork` or `Nameserver` according to
  `objectClassName`;
- `DomainSearchResults`, `EntitySearchResults` or `NameserverSearchResults`
  when it has the matching search results member;
- `Help` for any other JSON object.

`DecoderError` (a `ValueError`) is raised for invalid JSON, a document that is
not an object, an `objectClassName` that is not a string, or one that is not
recognised. `Decoder(data, target=SomeModel).decode()` decodes into a chosen
model class instead of guessing.

Decoding is forgiving. Values of the wrong JSON type are converted where
possible (for example a number into a string field, or `"10"` into an integer
field); values that cannot be converted or are out of range are left at their
defaults. Each decoded object carries a `decode_data` attribute, a
`DecodeData` record with:

- `fields()` – every member present in the JSON object;
- `unknown_fields()` – members no model field describes;
- `notes(key)` – conversion and error notes for a member;
- `value(key)` – the raw JSON value of a member.

The models live in `rdap.models`: besides the response classes above there
are `Link`, `Event`, `Notice`, `Remark`, `PublicID`, `Variant`,
`VariantName`, `SecureDNS`, `DSData`, `KeyData` and `IPAddressSet`. Fields
use Python names (`ldh_name`, `public_ids`, `port43`, ...); `rdap_field()`
declares a field together with its RDAP member name.

## Building requests (`rdap.request`)

```python
from rdap.request import auto_request, domain_request

req = domain_request("example.cz").with_server("https://rdap.example")
print(req.url())          # https://rdap.example/domain/example.cz

guess = auto_request("192.0.2.0/24")
print(guess.type)         # ip
```

`Request` holds a `RequestType`, the query text, extra query `params`, and
the `server` base URL; `url()` returns `None` while no server is set. Search
types put the query in the URL's query string (for example
`domains?name=...`); lookup types escape it into the path. For
`RequestType.RAW` the server is the complete URL and is returned unchanged.

Helper constructors: `help_request`, `autnum_request`, `ip_request`,
`ip_net_request`, `domain_request`, `entity_request`, `nameserver_request`,
`raw_request` and `new_request`. `auto_request` recognises http(s) URLs (a
URL without a path becomes a domain request), IP addresses and networks, AS
numbers (`AS1234`, `as1234`, `1234`), names containing a dot as domains, and
treats anything else as an entity handle.

## Contact data (`rdap.vcard`)

```python
from rdap.vcard import VCard

card = VCard.from_json(b'["vcard", [["fn", {}, "text", "Joe Appleseed"]]]')
print(card.name())        # Joe Appleseed
```

`VCard.from_json` parses a jCard document and `VCard.from_value` an already
parsed one; an invalid document raises `VCardError`, and an invalid property
does too unless `ignore_invalid_properties=True`, which skips it. `get(name)`
and `get_first(name)` look up `VCardProperty` objects, whose `values()`
flattens the value into strings. Accessors: `name`, `po_box`,
`extended_address`, `street_address`, `locality`, `region`, `postal_code`,
`country`, `tel`, `fax`, `email` and `org`.

## Output (`rdap.printer`, `rdap.response`)

```python
from rdap.printer import Printer

Printer(brief_links=True).print(result)
```

`Printer` writes any decoded response object to `writer` (standard output by
default), one indentation level per nested object, including members the
models do not know. Options: `indent_char`, `indent_size`, `brief_output`,
`brief_links`, `omit_notices` and `omit_remarks`.

`Response(object=result).to_whois_style_response()` gives a flat
`WhoisStyleResponse` (`key_display_order`, `data`) with domain name,
registrar, dates, status, contacts and name servers. Only `Domain` objects are
summarised; other objects give an empty result.

## What this package does not do

It makes no network requests: there is no HTTP client, no bootstrap lookup of
which server to ask, and no command-line tool. `Request.fetch_roles`,
`Request.timeout`, `Response.http` and `Response.bootstrap_answer` are plain
fields for callers that fetch responses themselves; nothing in the package
acts on them.