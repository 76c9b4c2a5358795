import base64

import pytest
from lxml import etree
from lxml.etree import QName
from zeep import ns

from ebms_security import (
    Containment,
    MatchPolicy,
    MessageUnit,
    MessageUnitType,
    Payload,
    ProtocolStructureError,
    SignedPartsConfig,
    get_ebms_header_id,
    get_signed_parts_info,
    is_payload_referenced,
    match_signed_parts,
)
from ebms_security.constants import EBMS3_NS
from ebms_security.signed_parts import uri_ends_with_id

SOAP_ENV = "http://schemas.xmlsoap.org/soap/envelope/"
SHA256 = "http://www.w3.org/2001/04/xmlenc#sha256"

D1 = b"\x01" * 32
D2 = b"\x02" * 32
D3 = b"\x03" * 32


def _envelope(references=(), *, header_ids=("env-hdr-1",), body_id="body-1", signed=True):
    envelope = etree.Element(
        QName(SOAP_ENV, "Envelope"),
        nsmap={"soap": SOAP_ENV, "eb": EBMS3_NS, "wsse": ns.WSSE, "wsu": ns.WSU, "ds": ns.DS},
    )
    header = etree.SubElement(envelope, QName(SOAP_ENV, "Header"))
    for header_id in header_ids:
        messaging = etree.SubElement(header, QName(EBMS3_NS, "Messaging"))
        if header_id:
            messaging.set(QName(ns.WSU, "Id"), header_id)
    if signed:
        security = etree.SubElement(header, QName(ns.WSSE, "Security"))
        signature = etree.SubElement(security, QName(ns.DS, "Signature"))
        signed_info = etree.SubElement(signature, QName(ns.DS, "SignedInfo"))
        for uri, digest in references:
            ref = etree.SubElement(signed_info, QName(ns.DS, "Reference"), URI=uri)
            etree.SubElement(ref, QName(ns.DS, "DigestMethod"), Algorithm=SHA256)
            etree.SubElement(ref, QName(ns.DS, "DigestValue")).text = base64.b64encode(digest).decode("ascii")
    body = etree.SubElement(envelope, QName(SOAP_ENV, "Body"))
    if body_id:
        body.set(QName(ns.WSU, "Id"), body_id)
    return envelope


def test_unsigned_envelope_is_absent():
    envelope = _envelope(signed=False)
    assert get_signed_parts_info(envelope, [MessageUnit.user_message(Payload("cid:p1"))]) is None


def test_unsigned_envelope_without_ebms_header_is_absent():
    envelope = _envelope(header_ids=(), signed=False)
    assert get_signed_parts_info(envelope, []) is None


def test_signature_without_references_is_absent():
    envelope = _envelope(references=())
    assert get_signed_parts_info(envelope, []) is None


def test_header_and_payload_digests():
    p1 = Payload(declared_uri="cid:p1")
    envelope = _envelope([("#env-hdr-1", D1), ("cid:p1", D2)])

    info = match_signed_parts(envelope, [MessageUnit.user_message(p1)])

    assert info.header_digest.digest_value == D1
    assert info.header_digest.digest_method == SHA256
    assert list(info.payload_digests) == [p1]
    assert info.payload_digests[p1].digest_value == D2


def test_signature_matching_nothing_gives_empty_info():
    p1 = Payload(declared_uri="cid:p1")
    envelope = _envelope([("#something-else", D1)])

    info = get_signed_parts_info(envelope, [MessageUnit.user_message(p1)])

    assert info is not None
    assert info.header_digest is None
    assert info.payload_digests == {}


def test_first_header_reference_wins():
    envelope = _envelope([("#env-hdr-1", D1), ("#env-hdr-1", D2)])
    info = get_signed_parts_info(envelope, [])
    assert info.header_digest.digest_value == D1


def test_last_payload_reference_wins_by_default():
    p1 = Payload(declared_uri="p1")
    envelope = _envelope([("cid:p1", D1), ("#p1", D2)])
    info = get_signed_parts_info(envelope, [MessageUnit.user_message(p1)])
    assert info.payload_digests[p1].digest_value == D2


def test_first_payload_reference_wins_when_configured():
    p1 = Payload(declared_uri="p1")
    envelope = _envelope([("cid:p1", D1), ("#p1", D2)])
    cfg = SignedPartsConfig(payload_match=MatchPolicy.FIRST)
    info = get_signed_parts_info(envelope, [MessageUnit.user_message(p1)], cfg)
    assert info.payload_digests[p1].digest_value == D1


def test_header_without_id_is_not_covered():
    p1 = Payload(declared_uri="cid:p1")
    envelope = _envelope([("#env-hdr-1", D1), ("cid:p1", D2)], header_ids=(None,))
    info = get_signed_parts_info(envelope, [MessageUnit.user_message(p1)])
    assert info.header_digest is None
    assert info.payload_digests[p1].digest_value == D2


def test_body_and_attachment_payloads():
    body_pl = Payload(containment=Containment.BODY)
    att_pl = Payload(declared_uri="att1", containment=Containment.ATTACHMENT)
    unnamed = Payload(containment=Containment.ATTACHMENT)
    envelope = _envelope([("#env-hdr-1", D1), ("#body-1", D2), ("cid:att1", D3)])

    info = get_signed_parts_info(envelope, [MessageUnit.user_message(body_pl, att_pl, unnamed)])

    assert info.payload_digests[body_pl].digest_value == D2
    assert info.payload_digests[att_pl].digest_value == D3
    assert unnamed not in info.payload_digests


def test_signal_message_units_are_skipped():
    p1 = Payload(declared_uri="cid:p1")
    receipt = MessageUnit(MessageUnitType.RECEIPT, message_id="r1", payloads=[p1])
    envelope = _envelope([("cid:p1", D2)])

    info = get_signed_parts_info(envelope, [receipt])

    assert info.payload_digests == {}


def test_payloads_of_multiple_user_messages():
    p1 = Payload(declared_uri="cid:p1")
    p2 = Payload(declared_uri="cid:p2")
    envelope = _envelope([("cid:p2", D2), ("cid:p1", D1)])
    units = [MessageUnit.user_message(p1), MessageUnit(MessageUnitType.PULL_REQUEST), MessageUnit.user_message(p2)]

    info = get_signed_parts_info(envelope, units)

    assert info.payload_digests[p1].digest_value == D1
    assert info.payload_digests[p2].digest_value == D2


@pytest.mark.parametrize("header_ids", [(), ("a", "b")])
def test_signed_envelope_requires_exactly_one_ebms_header(header_ids):
    envelope = _envelope([("#a", D1)], header_ids=header_ids)
    with pytest.raises(ProtocolStructureError):
        get_signed_parts_info(envelope, [])


def test_ebms_header_id():
    assert get_ebms_header_id(etree.ElementTree(_envelope())) == "env-hdr-1"


def test_attachment_uri_is_suffix_matched():
    p = Payload(declared_uri="cid:att1")
    envelope = _envelope()
    assert is_payload_referenced(p, "cid:att1", envelope)
    assert not is_payload_referenced(p, "other-cid:att1", envelope)
    assert not is_payload_referenced(p, "cid:att1.xml", envelope)


def test_body_payload_matched_by_body_id():
    p = Payload(containment=Containment.BODY)
    envelope = _envelope()
    assert is_payload_referenced(p, "#body-1", envelope)
    assert not is_payload_referenced(p, "#body-2", envelope)


def test_body_payload_without_body_id():
    p = Payload(containment=Containment.BODY)
    envelope = _envelope(body_id=None)
    assert not is_payload_referenced(p, "#body-1", envelope)


def test_declared_uri_takes_precedence_over_body():
    p = Payload(declared_uri="body-part", containment=Containment.BODY)
    envelope = _envelope()
    assert is_payload_referenced(p, "#body-part", envelope)
    assert not is_payload_referenced(p, "#body-1", envelope)


@pytest.mark.parametrize(
    "ref_uri, part_id, expected",
    [
        ("#env-hdr-1", "env-hdr-1", True),
        ("cid:att1", "att1", True),
        ("cid:att1", "cid:att1", True),
        ("#nobody-1", "body-1", False),
        ("#body-1", None, False),
        ("#body-1", "", False),
    ],
)
def test_uri_ends_with_id(ref_uri, part_id, expected):
    assert uri_ends_with_id(ref_uri, part_id) is expected
