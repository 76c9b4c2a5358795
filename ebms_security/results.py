from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from cryptography.hazmat.primitives import hashes

from .utils_crypto import digest_hash_for

if TYPE_CHECKING:
    from .message import Payload


@dataclass(frozen=True)
class SignedPartMetadata:
    """Digest information of a message part covered by the signature."""

    digest_method: Optional[str]
    digest_value: bytes
    transforms: Tuple[str, ...] = ()

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        return digest_hash_for(self.digest_method)


@dataclass
class SignedMessagePartsInfo:
    """Digests of the ebMS header and the payloads of a signed message.

    A payload that is not in ``payload_digests`` is not covered by any
    reference of the signature.
    """

    header_digest: Optional[SignedPartMetadata] = None
    payload_digests: Dict["Payload", SignedPartMetadata] = field(default_factory=dict)
