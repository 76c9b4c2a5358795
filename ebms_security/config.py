import enum
from dataclasses import dataclass

from .constants import EBMS3_NS
from .soap.security import SecurityHeaderTarget


class MatchPolicy(enum.Enum):
    """Which reference is kept when a part matches more than one."""

    FIRST = "first"
    LAST = "last"


@dataclass
class SignedPartsConfig:
    """Settings for resolving the signed parts of an ebMS message."""

    ebms_namespace: str = EBMS3_NS
    header_target: SecurityHeaderTarget = SecurityHeaderTarget.DEFAULT
    # Payloads historically keep the last matching reference while the header
    # keeps the first one. FIRST makes both consistent.
    payload_match: MatchPolicy = MatchPolicy.LAST
