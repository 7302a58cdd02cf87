from typing import Any, Iterable

from lxml import etree

from soappost.util.logging import get_logger

log = get_logger(__name__)

SOAP_NAMESPACES = {
    "1.1": "http://schemas.xmlsoap.org/soap/envelope/",
    "1.2": "http://www.w3.org/2003/05/soap-envelope",
}


def _as_element(part: Any) -> etree._Element:
    if isinstance(part, etree._Element):
        return part
    if isinstance(part, (str, bytes)):
        return etree.fromstring(part)
    raise TypeError(f"Cannot embed {type(part).__name__} in a SOAP envelope")


def make_envelope(
    *body_elements: Any,
    headers: Iterable[Any] = (),
    version: str = "1.1",
) -> etree._Element:
    """
    Build a SOAP envelope around the given body (and optional header) parts.

    Args:
        *body_elements: lxml elements or XML strings placed under ``Body``.
        headers: Parts placed under ``Header``; the ``Header`` element is
            omitted when empty.
        version (str): ``"1.1"`` or ``"1.2"``.

    Returns:
        lxml.etree._Element: The ``Envelope`` element.
    """
    try:
        ns = SOAP_NAMESPACES[version]
    except KeyError as exc:
        raise ValueError(f"Unsupported SOAP version: {version}") from exc

    envelope = etree.Element(etree.QName(ns, "Envelope"), nsmap={"soap": ns})
    headers = [_as_element(h) for h in headers]
    if headers:
        header = etree.SubElement(envelope, etree.QName(ns, "Header"))
        header.extend(headers)
    body = etree.SubElement(envelope, etree.QName(ns, "Body"))
    body.extend(_as_element(b) for b in body_elements)
    return envelope


def message_to_bytes(message: Any) -> bytes | None:
    """Serialize a message to the bytes written as the request body."""
    if message is None:
        return None
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (etree._Element, etree._ElementTree)):
        return etree.tostring(message, xml_declaration=True, encoding="utf-8")
    raise TypeError(f"Cannot serialize {type(message).__name__} as a SOAP message")


def message_to_string(message: Any) -> str | None:
    """
    Text form of a SOAP message, decoded as UTF-8.

    Returns None (and logs the error) when the message cannot be serialized.
    """
    try:
        data = message_to_bytes(message)
        return None if data is None else data.decode("utf-8")
    except (TypeError, UnicodeDecodeError, etree.LxmlError):
        log.exception("could not serialize SOAP message")
        return None
