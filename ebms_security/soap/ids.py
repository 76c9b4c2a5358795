"""Resolution of the identifier a signature reference uses to point at an element."""
from typing import Optional

from lxml import etree
from lxml.etree import QName

from ..constants import WSU_NS, XML_NS

WSU_ID = QName(WSU_NS, "Id").text
XML_ID = QName(XML_NS, "id").text


def _is_registered_id(element: etree._Element, value: str) -> bool:
    # libxml2 keeps a per document table of attributes typed ID (from the DTD
    # or schema validation); id() looks values up in that table. An ID is an
    # NCName, id() would split anything with whitespace into several lookups.
    if any(c.isspace() for c in value):
        return False
    return any(match is element for match in element.xpath("id($value)", value=value))


def resolve_id(element: etree._Element) -> Optional[str]:
    """Returns the id of the given element.

    Normally this is the ``wsu:Id`` attribute. When that is not set the
    ``xml:id`` attribute is used and as last resort the first attribute
    of type ID. Returns ``None`` when the element has no identifier.
    """
    for attr in (WSU_ID, XML_ID):
        value = element.get(attr)
        if value:
            return value

    for value in element.attrib.values():
        if value and _is_registered_id(element, value):
            return value
    return None
