from rdap.models import Domain, Entity, Event, Nameserver, PublicID
from rdap.response import Response, WhoisStyleResponse
from rdap.vcard import VCard


def _vcard(*properties):
    return VCard.from_value(["vcard", list(properties)])


def _domain():
    registrar = Entity(
        roles=["registrar"],
        vcard=_vcard(["fn", {}, "text", "Example Registrar"]),
        public_ids=[PublicID(type="IANA Registrar ID", identifier="9999")],
    )
    registrant = Entity(
        roles=["registrant"],
        vcard=_vcard(
            ["fn", {}, "text", "Jane Doe"],
            [
                "adr",
                {},
                "text",
                ["", "Suite 1", "1 Main St", "Springfield", "XX", "ZIP1", "Examplia"],
            ],
            ["tel", {"type": ["voice"]}, "uri", "tel-voice"],
            ["tel", {"type": ["fax"]}, "uri", "tel-fax"],
            ["email", {}, "text", "jane@example.com"],
        ),
    )
    second_registrant = Entity(
        roles=["registrant"], vcard=_vcard(["fn", {}, "text", "Somebody Else"])
    )
    admin_without_vcard = Entity(roles=["administrative"])
    return Domain(
        ldh_name="example.com",
        handle="EXAMPLE-1",
        port43="whois.example.com",
        events=[
            Event(action="registration", date="2000-01-01T00:00:00Z"),
            Event(action="expiration", date="2030-01-01T00:00:00Z"),
            Event(action="last changed", date="2020-06-01T00:00:00Z"),
            Event(action="transfer", date="2021-01-01T00:00:00Z"),
        ],
        entities=[registrar, registrant, second_registrant, admin_without_vcard],
        status=["active", "client transfer prohibited"],
        nameservers=[Nameserver(ldh_name="ns1.example.com"), Nameserver(ldh_name="ns2.example.com")],
    )


def test_add_ignores_empty_and_keeps_order():
    w = WhoisStyleResponse()
    w.add("B", "1")
    w.add("A", "")
    w.add("A", "2")
    w.add("B", "3")
    assert w.key_display_order == ["B", "A"]
    assert w.data == {"B": ["1", "3"], "A": ["2"]}


def test_non_domain_gives_empty_response():
    w = Response(object=Entity(handle="X")).to_whois_style_response()
    assert w.key_display_order == []
    assert w.data == {}


def test_domain_basic_fields():
    w = Response(object=_domain()).to_whois_style_response()
    assert w.data["Domain Name"] == ["example.com"]
    assert w.data["Handle"] == ["EXAMPLE-1"]
    assert w.data["Registrar WHOIS Server"] == ["whois.example.com"]
    assert w.key_display_order[:3] == ["Domain Name", "Handle", "Registrar WHOIS Server"]


def test_domain_events():
    w = Response(object=_domain()).to_whois_style_response()
    assert w.data["Creation Date"] == ["2000-01-01T00:00:00Z"]
    assert w.data["Expiration Date"] == ["2030-01-01T00:00:00Z"]
    assert w.data["Updated Date"] == ["2020-06-01T00:00:00Z"]
    assert "2021-01-01T00:00:00Z" not in [v for vs in w.data.values() for v in vs]


def test_registrar_fields():
    w = Response(object=_domain()).to_whois_style_response()
    assert w.data["Registrar"] == ["Example Registrar"]
    assert w.data["Registrar IANA ID"] == ["9999"]


def test_status_and_nameservers():
    w = Response(object=_domain()).to_whois_style_response()
    assert w.data["Domain Status"] == ["active", "client transfer prohibited"]
    assert w.data["Name Server"] == ["ns1.example.com", "ns2.example.com"]
    assert w.key_display_order[-1] == "Name Server"


def test_first_registrant_is_used():
    w = Response(object=_domain()).to_whois_style_response()
    assert w.data["Registrant Name"] == ["Jane Doe"]
    assert w.data["Registrant Extended Address"] == ["Suite 1"]
    assert w.data["Registrant Street"] == ["1 Main St"]
    assert w.data["Registrant Locality"] == ["Springfield"]
    assert w.data["Registrant Post Code"] == ["ZIP1"]
    assert w.data["Registrant Country"] == ["Examplia"]
    assert w.data["Registrant Tel"] == ["tel-voice"]
    assert w.data["Registrant Fax"] == ["tel-fax"]
    assert w.data["Registrant Email"] == ["jane@example.com"]
    assert "Registrant PO Box" not in w.data


def test_entity_without_vcard_adds_nothing():
    w = Response(object=_domain()).to_whois_style_response()
    assert not any(key.startswith("Admin") for key in w.key_display_order)
    assert not any(key.startswith("Tech") for key in w.key_display_order)


def test_every_key_in_order_has_data():
    w = Response(object=_domain()).to_whois_style_response()
    assert sorted(w.key_display_order) == sorted(w.data)
    assert len(set(w.key_display_order)) == len(w.key_display_order)