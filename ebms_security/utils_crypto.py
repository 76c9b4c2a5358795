import secrets
from typing import Optional

from cryptography.hazmat.primitives import hashes

from .errors import UnsupportedAlgorithmError

DIGEST_ALGORITHMS = {
    "http://www.w3.org/2000/09/xmldsig#sha1": hashes.SHA1,
    "http://www.w3.org/2001/04/xmldsig-more#sha224": hashes.SHA224,
    "http://www.w3.org/2001/04/xmlenc#sha256": hashes.SHA256,
    "http://www.w3.org/2001/04/xmldsig-more#sha384": hashes.SHA384,
    "http://www.w3.org/2001/04/xmlenc#sha512": hashes.SHA512,
}


def digest_hash_for(algorithm_uri: Optional[str]) -> hashes.HashAlgorithm:
    """Returns the hash to recompute a digest made with the given DigestMethod."""
    try:
        return DIGEST_ALGORITHMS[algorithm_uri]()
    except KeyError:
        raise UnsupportedAlgorithmError(f"Unsupported digest algorithm: {algorithm_uri}") from None


def generate_password() -> str:
    """Generates a 16 character random string for use as a password."""
    return secrets.token_hex(8)
