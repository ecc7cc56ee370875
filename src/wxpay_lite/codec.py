"""XML wire codec for the legacy protocol.

Requests and responses are flat ``<xml>`` documents whose child elements
are the wire fields::

    <xml>
      <appid>wx2421b1c4370ec43b</appid>
      <mch_id>10000100</mch_id>
      ...
    </xml>
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

from lxml import etree

from wxpay_lite.exceptions import TransportError

ROOT_TAG = "xml"

# Gateway responses never need entities, DTDs or network access.
_PARSER = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_blank_text=True,
    huge_tree=False,
)


def to_xml(pairs: Iterable[Tuple[str, str]]) -> bytes:
    """Marshal ``(name, value)`` pairs into an ``<xml>`` document, in order."""
    root = etree.Element(ROOT_TAG)
    for name, value in pairs:
        child = etree.SubElement(root, name)
        child.text = value
    return etree.tostring(root, encoding="utf-8", pretty_print=True)


def from_xml(data: bytes | str) -> Dict[str, str]:
    """Unmarshal a flat ``<xml>`` document into a field mapping.

    CDATA sections are unwrapped; missing text becomes ``""``.

    Raises:
        TransportError: If the body is not well-formed XML.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data.strip():
        raise TransportError("Empty response body")
    try:
        root = etree.fromstring(data, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise TransportError(f"Invalid XML response: {data[:200]!r}", original_error=e) from e

    return {
        child.tag: child.text or ""
        for child in root
        if isinstance(child.tag, str)
    }
