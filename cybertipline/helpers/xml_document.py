"""
XML codec for CyberTipline documents.

Document models are pydantic models deriving from ``XmlModel``. Their fields,
in declaration order, are the schema: the wire name is the field alias,
``XML_ATTRIBUTE`` / ``XML_TEXT`` markers in ``Annotated`` metadata place a
value in an attribute or in the element text, and everything else becomes a
child element (one per list item for repeated fields). ``None`` and empty
lists produce nothing.
"""

import xml.etree.ElementTree as ET
from types import UnionType
from typing import Annotated, Any, ClassVar, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from cybertipline.helpers.scalars import encode_scalar
from cybertipline.models.exceptions import DecodingException

M = TypeVar("M", bound="XmlModel")

XML_CONTENT_TYPE = "text/xml; charset=utf-8"


class XmlPlacement:
    """Marker placing a field in an attribute or in element text."""

    def __init__(self, kind: str) -> None:
        self.kind = kind

    def __repr__(self) -> str:
        return f"XmlPlacement({self.kind!r})"


XML_ATTRIBUTE = XmlPlacement("attribute")
XML_TEXT = XmlPlacement("text")


class XmlModel(BaseModel):
    """Base class for every CyberTipline document block."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    # Root element name for top-level documents
    xml_tag: ClassVar[str] = ""


def _placement(field: Any) -> str:
    for item in field.metadata:
        if isinstance(item, XmlPlacement):
            return item.kind
    return "element"


def to_element(model: XmlModel, tag: str | None = None) -> ET.Element:
    """Build the element tree for a document block."""
    elem = ET.Element(tag or model.xml_tag)
    for name, field in type(model).model_fields.items():
        value = getattr(model, name)
        if value is None:
            continue
        wire_name = field.alias or name
        placement = _placement(field)
        if placement == "attribute":
            elem.set(wire_name, encode_scalar(value))
        elif placement == "text":
            elem.text = encode_scalar(value)
        else:
            items = value if isinstance(value, list) else [value]
            for item in items:
                if isinstance(item, XmlModel):
                    elem.append(to_element(item, wire_name))
                else:
                    ET.SubElement(elem, wire_name).text = encode_scalar(item)
    return elem


def to_xml(model: XmlModel) -> bytes:
    """Serialize a top-level document to UTF-8 XML bytes."""
    if not model.xml_tag:
        raise ValueError(f"{type(model).__name__} is not a top-level document")
    return ET.tostring(to_element(model), encoding="utf-8", xml_declaration=True)


def _unwrap(annotation: Any) -> tuple[Any, bool]:
    """Strip Optional / Annotated / list from a field annotation."""
    is_list = False
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
        elif origin is list:
            is_list = True
            annotation = get_args(annotation)[0]
        elif origin is Union or origin is UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            annotation = args[0]
        else:
            return annotation, is_list


def _element_data(cls: type[XmlModel], elem: ET.Element) -> dict[str, Any]:
    """Collect raw values for ``cls`` from ``elem``, keyed by wire name."""
    data: dict[str, Any] = {}
    for name, field in cls.model_fields.items():
        wire_name = field.alias or name
        placement = _placement(field)
        if placement == "attribute":
            if wire_name in elem.attrib:
                data[wire_name] = elem.attrib[wire_name]
        elif placement == "text":
            if elem.text is not None:
                data[wire_name] = elem.text.strip()
        else:
            children = elem.findall(wire_name)
            if not children:
                continue
            inner, is_list = _unwrap(field.annotation)
            if isinstance(inner, type) and issubclass(inner, XmlModel):
                values = [_element_data(inner, child) for child in children]
            else:
                values = [(child.text or "").strip() for child in children]
            data[wire_name] = values if is_list else values[0]
    return data


def from_xml(
    cls: type[M],
    body: bytes,
    operation: str = "decode",
    status_code: int | None = None,
) -> M:
    """
    Decode a response body into ``cls``.

    Elements that are absent stay ``None``; unknown elements are ignored.

    Raises:
        DecodingException: The body is not well-formed XML or its values do
            not fit the model.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise DecodingException(
            operation, f"malformed response document: {e}", status_code
        ) from e

    try:
        return cls.model_validate(_element_data(cls, root))
    except ValidationError as e:
        raise DecodingException(
            operation,
            f"unexpected {root.tag} document: {e.error_count()} invalid field(s)",
            status_code,
        ) from e
