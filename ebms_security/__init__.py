"""Signed part resolution for ebMS3 messages secured with WS-Security."""
from .config import MatchPolicy, SignedPartsConfig
from .errors import (
    ProtocolStructureError,
    SecurityHeaderError,
    SecurityProcessingError,
    UnsupportedAlgorithmError,
)
from .message import Containment, MessageUnit, MessageUnitType, Payload
from .results import SignedMessagePartsInfo, SignedPartMetadata
from .signed_parts import (
    get_ebms_header_id,
    get_signed_parts_info,
    is_payload_referenced,
    match_signed_parts,
)
from .keyref import (
    X509ReferenceType,
    detect_reference_type,
    key_identifier_for,
    reference_type_for,
)
from .soap import (
    ReferenceDescriptor,
    SecurityHeaderTarget,
    get_security_header_element,
    locate_signature_references,
    resolve_id,
)
from importlib.metadata import version as _v, PackageNotFoundError
try:
    __version__ = _v("ebms-security")
except PackageNotFoundError:
    __version__ = "0.0.0+editable"

__all__ = [
    # message model
    "Containment",
    "MessageUnit",
    "MessageUnitType",
    "Payload",
    # signed parts
    "MatchPolicy",
    "SignedPartsConfig",
    "SignedMessagePartsInfo",
    "SignedPartMetadata",
    "get_ebms_header_id",
    "get_signed_parts_info",
    "is_payload_referenced",
    "match_signed_parts",
    # WS-Security
    "ReferenceDescriptor",
    "SecurityHeaderTarget",
    "get_security_header_element",
    "locate_signature_references",
    "resolve_id",
    # X.509 key references
    "X509ReferenceType",
    "detect_reference_type",
    "key_identifier_for",
    "reference_type_for",
    # errors
    "SecurityProcessingError",
    "ProtocolStructureError",
    "SecurityHeaderError",
    "UnsupportedAlgorithmError",
]
