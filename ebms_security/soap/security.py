import base64
import binascii
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from lxml import etree
from lxml.etree import QName
from zeep.utils import detect_soap_env

from ..constants import DS_NS, ROLE_ATTRIBUTES, SOAP12_ULTIMATE_RECEIVER, WSSE_NS
from ..errors import SecurityHeaderError, SecurityProcessingError
from ..results import SignedPartMetadata

logger = logging.getLogger(__name__)

SECURITY = QName(WSSE_NS, "Security").text
SIGNATURE = QName(DS_NS, "Signature").text
REFERENCE = QName(DS_NS, "Reference").text

Envelope = Union[etree._Element, etree._ElementTree]


class SecurityHeaderTarget(enum.Enum):
    """Role/actor a WS-Security header block is targeted at."""

    DEFAULT = None
    EBMS = "ebms"

    @property
    def id(self) -> Optional[str]:
        return self.value

    def matches(self, role: Optional[str]) -> bool:
        if self is SecurityHeaderTarget.DEFAULT:
            return not role or role == SOAP12_ULTIMATE_RECEIVER
        return role == self.value


@dataclass(frozen=True)
class ReferenceDescriptor:
    """Target and digest information of a single ``ds:Reference``."""

    uri: str
    digest_method: Optional[str]
    digest_value: bytes
    transforms: Tuple[str, ...] = ()

    @classmethod
    def from_element(cls, ref: etree._Element) -> "ReferenceDescriptor":
        digest_method = ref.find(QName(DS_NS, "DigestMethod"))
        digest_text = ref.findtext(QName(DS_NS, "DigestValue")) or ""
        try:
            digest_value = base64.b64decode(digest_text)
        except binascii.Error as exc:
            raise SecurityProcessingError("Invalid ds:DigestValue in signature reference", element=ref) from exc
        transforms = tuple(
            t.get("Algorithm")
            for t in ref.iterfind(f"{{{DS_NS}}}Transforms/{{{DS_NS}}}Transform")
            if t.get("Algorithm")
        )
        return cls(
            uri=ref.get("URI", ""),
            digest_method=digest_method.get("Algorithm") if digest_method is not None else None,
            digest_value=digest_value,
            transforms=transforms,
        )

    @property
    def metadata(self) -> SignedPartMetadata:
        return SignedPartMetadata(
            digest_method=self.digest_method,
            digest_value=self.digest_value,
            transforms=self.transforms,
        )


def envelope_root(envelope: Envelope) -> etree._Element:
    if isinstance(envelope, etree._ElementTree):
        return envelope.getroot()
    return envelope


def find_security_header(target: SecurityHeaderTarget, envelope: Envelope) -> Optional[etree._Element]:
    """Returns the ``wsse:Security`` header block targeted at the given role.

    Raises SecurityHeaderError when the document is not a SOAP envelope or
    contains more than one header block for the same target.
    """
    root = envelope_root(envelope)
    soap_env = detect_soap_env(root)
    role_attr = ROLE_ATTRIBUTES.get(soap_env)
    if role_attr is None:
        raise SecurityHeaderError(f"Not a SOAP envelope: {root.tag}", element=root)

    header = root.find(QName(soap_env, "Header"))
    if header is None:
        return None

    found = None
    for security in header.iterchildren(SECURITY):
        if not target.matches(security.get(QName(soap_env, role_attr).text)):
            continue
        if found is not None:
            raise SecurityHeaderError(
                f"Multiple WS-Security headers targeted at {target.name}", element=security
            )
        found = security
    return found


def get_security_header_element(target: SecurityHeaderTarget, envelope: Envelope) -> Optional[etree._Element]:
    """Same as find_security_header but returns None instead of raising."""
    try:
        return find_security_header(target, envelope)
    except SecurityHeaderError as exc:
        logger.warning("Ignoring WS-Security header for target %s: %s", target.name, exc)
        return None


def locate_signature_references(
    envelope: Envelope,
    target: SecurityHeaderTarget = SecurityHeaderTarget.DEFAULT,
) -> Optional[List[ReferenceDescriptor]]:
    """Gets the references of the signature in the targeted WS-Security header.

    In an ebMS message there may only be one ``ds:Signature`` in the default
    header, so the ``ds:SignedInfo`` of the first one found is used. Returns
    ``None`` when there is no header or no signature in it.
    """
    security = get_security_header_element(target, envelope)
    if security is None:
        logger.debug("No WS-Security header targeted at %s", target.name)
        return None

    signatures = list(security.iter(SIGNATURE))
    if not signatures:
        logger.debug("WS-Security header for %s contains no signature", target.name)
        return None
    if len(signatures) > 1:
        logger.warning("Found %d signatures in WS-Security header, using the first", len(signatures))

    # ds:SignedInfo is the first child of ds:Signature
    signed_info = next(signatures[0].iterchildren(etree.Element), None)
    if signed_info is None:
        return []
    return [ReferenceDescriptor.from_element(ref) for ref in signed_info.iter(REFERENCE)]
