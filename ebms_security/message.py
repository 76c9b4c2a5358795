import enum
from dataclasses import dataclass, field
from typing import List, Optional


class Containment(enum.Enum):
    """Where the payload content is carried."""

    BODY = "body"
    ATTACHMENT = "attachment"
    EXTERNAL = "external"


class MessageUnitType(enum.Enum):
    USER_MESSAGE = "UserMessage"
    PULL_REQUEST = "PullRequest"
    RECEIPT = "Receipt"
    ERROR = "Error"


@dataclass(eq=False)
class Payload:
    """Payload of a user message.

    ``declared_uri`` is the reference from the ``eb:PartInfo/@href`` without
    the ``cid:`` or ``#`` prefix a signature reference may add. Payloads
    compare and hash by identity so they can be used as mapping keys.
    """

    declared_uri: Optional[str] = None
    containment: Containment = Containment.ATTACHMENT
    mime_type: str = "application/octet-stream"


@dataclass(eq=False)
class MessageUnit:
    kind: MessageUnitType
    message_id: Optional[str] = None
    payloads: List[Payload] = field(default_factory=list)

    @property
    def carries_payloads(self) -> bool:
        return self.kind is MessageUnitType.USER_MESSAGE

    @classmethod
    def user_message(cls, *payloads: Payload, message_id: Optional[str] = None) -> "MessageUnit":
        return cls(MessageUnitType.USER_MESSAGE, message_id=message_id, payloads=list(payloads))
