from typing import Any, Optional


class SecurityProcessingError(RuntimeError):
    """Base class for any problem found while inspecting a secured message."""

    def __init__(self, msg: str, *, element: Optional[Any] = None):
        super().__init__(msg)
        self.element = element


class ProtocolStructureError(SecurityProcessingError):
    """The envelope does not contain exactly one ebMS header."""
    pass


class SecurityHeaderError(SecurityProcessingError):
    """Malformed or ambiguous WS-Security header structure."""
    pass


class UnsupportedAlgorithmError(SecurityProcessingError):
    """Digest algorithm URI without a known hash implementation."""
    pass
