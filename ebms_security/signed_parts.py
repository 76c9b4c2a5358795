"""Resolves which signature references cover the ebMS header and the payloads."""
import logging
from functools import reduce
from typing import Dict, Iterable, Iterator, Optional, Tuple

from lxml import etree
from lxml.etree import QName
from zeep.utils import detect_soap_env

from .config import MatchPolicy, SignedPartsConfig
from .constants import EBMS3_NS
from .errors import ProtocolStructureError
from .message import Containment, MessageUnit, Payload
from .results import SignedMessagePartsInfo, SignedPartMetadata
from .soap.ids import resolve_id
from .soap.security import Envelope, ReferenceDescriptor, envelope_root, locate_signature_references

logger = logging.getLogger(__name__)

# Characters a reference URI may put directly in front of the id of a part
URI_PREFIX_SEPARATORS = ("#", ":")


def uri_ends_with_id(ref_uri: str, part_id: Optional[str]) -> bool:
    """Checks that the reference URI ends with the id of a part.

    The id itself never carries the ``#`` or ``cid:`` prefix of the
    reference, so the URI must either equal the id or have it directly after
    a ``#`` or scheme separator. "cid:att1" and "#att1" match "att1", while
    "other-cid:att1" does not match "cid:att1".
    """
    if not part_id or not ref_uri.endswith(part_id):
        return False
    prefix = ref_uri[: len(ref_uri) - len(part_id)]
    return not prefix or prefix.endswith(URI_PREFIX_SEPARATORS)


def get_ebms_header_id(envelope: Envelope, namespace: str = EBMS3_NS) -> Optional[str]:
    """Gets the id of the ``eb:Messaging`` element.

    Raises ProtocolStructureError when the envelope contains no or multiple
    ebMS headers, which makes it an invalid ebMS message.
    """
    headers = list(envelope_root(envelope).iter(QName(namespace, "Messaging").text))
    if len(headers) != 1:
        raise ProtocolStructureError(
            f"Expected exactly one ebMS message header in SOAP envelope, found {len(headers)}"
        )
    return resolve_id(headers[0])


def find_body_element(envelope: Envelope) -> Optional[etree._Element]:
    root = envelope_root(envelope)
    soap_env = detect_soap_env(root)
    if not soap_env:
        return None
    return root.find(QName(soap_env, "Body"))


def is_payload_referenced(payload: Payload, ref_uri: str, envelope: Envelope) -> bool:
    """Checks whether the reference URI applies to the given payload."""
    if payload.declared_uri:
        return uri_ends_with_id(ref_uri, payload.declared_uri)
    if payload.containment is Containment.BODY:
        # A payload in the SOAP Body is referenced through the Body's id
        body = find_body_element(envelope)
        return body is not None and uri_ends_with_id(ref_uri, resolve_id(body))
    return False


def _match_header(refs: Iterable[ReferenceDescriptor], header_id: Optional[str]) -> Optional[SignedPartMetadata]:
    if not header_id:
        logger.warning("ebMS header has no id, it cannot be covered by the signature")
        return None
    match = next((ref for ref in refs if uri_ends_with_id(ref.uri, header_id)), None)
    return match.metadata if match is not None else None


def _payload_matches(
    refs: Iterable[ReferenceDescriptor],
    message_units: Iterable[MessageUnit],
    envelope: Envelope,
) -> Iterator[Tuple[Payload, ReferenceDescriptor]]:
    for unit in message_units:
        if not unit.carries_payloads:
            continue
        for payload in unit.payloads or ():
            for ref in refs:
                if is_payload_referenced(payload, ref.uri, envelope):
                    yield payload, ref


def get_signed_parts_info(
    envelope: Envelope,
    message_units: Iterable[MessageUnit],
    config: Optional[SignedPartsConfig] = None,
) -> Optional[SignedMessagePartsInfo]:
    """Gets the digests of the ebMS header and payloads from the signature references.

    Returns ``None`` when the message is not signed.
    """
    cfg = config or SignedPartsConfig()
    refs = locate_signature_references(envelope, cfg.header_target)
    if not refs:
        return None

    header_digest = _match_header(refs, get_ebms_header_id(envelope, cfg.ebms_namespace))

    def _keep(digests: Dict[Payload, SignedPartMetadata], match):
        payload, ref = match
        if cfg.payload_match is MatchPolicy.FIRST and payload in digests:
            return digests
        digests[payload] = ref.metadata
        return digests

    payload_digests = reduce(_keep, _payload_matches(refs, message_units, envelope), {})
    logger.debug(
        "Signature covers header: %s, payloads: %d", header_digest is not None, len(payload_digests)
    )
    return SignedMessagePartsInfo(header_digest=header_digest, payload_digests=payload_digests)


match_signed_parts = get_signed_parts_info
