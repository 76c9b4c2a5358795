"""Conversion between X.509 token reference methods and their WS-Security names."""
import enum
import logging
from typing import Optional

from lxml import etree
from lxml.etree import QName

from .constants import DS_NS, WSSE_NS

logger = logging.getLogger(__name__)


class X509ReferenceType(enum.Enum):
    BST_REFERENCE = "BSTReference"
    KEY_IDENTIFIER = "KeyIdentifier"
    ISSUER_AND_SERIAL = "IssuerAndSerial"


_KEY_IDENTIFIERS = {
    X509ReferenceType.BST_REFERENCE: "DirectReference",
    X509ReferenceType.KEY_IDENTIFIER: "SKIKeyIdentifier",
    X509ReferenceType.ISSUER_AND_SERIAL: "IssuerSerial",
}
_REFERENCE_TYPES = {v: k for k, v in _KEY_IDENTIFIERS.items()}


def key_identifier_for(ref_type: Optional[X509ReferenceType]) -> str:
    return _KEY_IDENTIFIERS.get(ref_type, "IssuerSerial")


def reference_type_for(key_identifier: Optional[str]) -> Optional[X509ReferenceType]:
    return _REFERENCE_TYPES.get(key_identifier)


def detect_reference_type(signature: etree._Element) -> Optional[X509ReferenceType]:
    """Determines how the ``ds:KeyInfo`` of a signature refers to the signing certificate."""
    key_info = signature.find(QName(DS_NS, "KeyInfo"))
    if key_info is None:
        return None

    str_el = key_info.find(QName(WSSE_NS, "SecurityTokenReference"))
    if str_el is not None:
        if str_el.find(QName(WSSE_NS, "Reference")) is not None:
            return X509ReferenceType.BST_REFERENCE
        if str_el.find(QName(WSSE_NS, "KeyIdentifier")) is not None:
            return X509ReferenceType.KEY_IDENTIFIER

    if key_info.find(f".//{{{DS_NS}}}X509IssuerSerial") is not None:
        return X509ReferenceType.ISSUER_AND_SERIAL
    logger.debug("Unrecognised key reference in signature KeyInfo")
    return None
