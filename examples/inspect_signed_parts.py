import base64
import logging
import sys
from pathlib import Path

from lxml import etree

from ebms_security import Containment, MessageUnit, Payload, get_signed_parts_info

logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger("example_inspect")


def main():
    if len(sys.argv) < 2:
        logger.error("usage: inspect_signed_parts.py ENVELOPE.xml [PAYLOAD_CID ...]")
        return 2

    envelope = etree.parse(str(Path(sys.argv[1])))
    payloads = [Payload(declared_uri=cid) for cid in sys.argv[2:]]
    payloads.append(Payload(containment=Containment.BODY))

    info = get_signed_parts_info(envelope, [MessageUnit.user_message(*payloads)])
    if info is None:
        logger.info("Message is not signed.")
        return 0

    if info.header_digest:
        logger.info(
            "ebMS header: %s %s",
            info.header_digest.digest_method,
            base64.b64encode(info.header_digest.digest_value).decode("ascii"),
        )
    else:
        logger.info("ebMS header is not covered by the signature")
    for payload in payloads:
        meta = info.payload_digests.get(payload)
        name = payload.declared_uri or "SOAP Body"
        if meta is None:
            logger.info("%s: not signed", name)
        else:
            logger.info("%s: %s %s", name, meta.digest_method, base64.b64encode(meta.digest_value).decode("ascii"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
