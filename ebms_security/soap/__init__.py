from .ids import resolve_id
from .security import (
    ReferenceDescriptor,
    SecurityHeaderTarget,
    find_security_header,
    get_security_header_element,
    locate_signature_references,
)

__all__ = [
    "resolve_id",
    "ReferenceDescriptor",
    "SecurityHeaderTarget",
    "find_security_header",
    "get_security_header_element",
    "locate_signature_references",
]
