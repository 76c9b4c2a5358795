from zeep import ns

EBMS3_NS = "http://docs.oasis-open.org/ebxml-msg/ebms/v3.0/ns/core/200704/"
XML_NS = "http://www.w3.org/XML/1998/namespace"

SOAP11_ENV_NS = ns.SOAP_ENV_11
SOAP12_ENV_NS = ns.SOAP_ENV_12
SOAP12_ULTIMATE_RECEIVER = "http://www.w3.org/2003/05/soap-envelope/role/ultimateReceiver"

DS_NS = ns.DS
WSSE_NS = ns.WSSE
WSU_NS = ns.WSU

# Attribute carrying the targeted role/actor of a header block, per SOAP version
ROLE_ATTRIBUTES = {
    SOAP11_ENV_NS: "actor",
    SOAP12_ENV_NS: "role",
}
