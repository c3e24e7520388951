from __future__ import annotations

import inspect
import types
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Type, Union, get_args, get_origin

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET
from pydantic import BaseModel

from codereadr.exceptions import DecodeError


class XmlAttribute:
    """Field marker: read the value from an attribute of the current element."""

    def __repr__(self) -> str:
        return "XmlAttribute()"


class XmlText:
    """Field marker: read the value from the current element's character data."""

    def __repr__(self) -> str:
        return "XmlText()"


# Targets whose text is trimmed before validation (as XML number parsing does).
_TRIMMED_SCALARS = (int, float, bool)


def parse_document(raw: bytes) -> ET.Element:
    """Parse response bytes into a root element.

    Security notes:
    - Uses defusedxml; entity expansion and external references are rejected.
    - Response bytes are untrusted.
    """

    try:
        return DefusedET.fromstring(raw)
    except (ET.ParseError, DefusedXmlException) as e:
        raise DecodeError(f"malformed XML response: {e}") from e


def bind_element(element: ET.Element, model: Type[BaseModel]) -> Dict[str, Any]:
    """Collect the values `model` declares from `element`.

    Rules per field (tag = alias or field name):
    - XmlAttribute: element attribute `tag`
    - XmlText: element character data, excluding child elements' text
    - list annotation: every direct child named `tag`
    - otherwise: first direct child named `tag` (nested models recurse)

    Anything absent is left out so the model's defaults and required-field
    checks apply. The returned dict is keyed by alias.
    """

    data: Dict[str, Any] = {}
    for name, field in model.model_fields.items():
        tag = field.alias or name
        marker = _marker(field.metadata)

        if isinstance(marker, XmlAttribute):
            if tag in element.attrib:
                data[tag] = element.attrib[tag]
            continue
        if isinstance(marker, XmlText):
            data[tag] = _char_data(element)
            continue

        annotation = _unwrap_optional(field.annotation)
        children = [child for child in element if child.tag == tag]
        if get_origin(annotation) in (list, List):
            args = get_args(annotation)
            item_type = _unwrap_optional(args[0]) if args else str
            data[tag] = [_bind_value(child, item_type) for child in children]
        elif children:
            data[tag] = _bind_value(children[0], annotation)
    return data


def _bind_value(element: ET.Element, target: Any) -> Any:
    if inspect.isclass(target) and issubclass(target, BaseModel):
        return bind_element(element, target)
    text = element.text or ""
    if target in _TRIMMED_SCALARS:
        return text.strip()
    return text


def _char_data(element: ET.Element) -> str:
    # The element's own text: its leading text plus the tail after each child.
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _marker(metadata: List[Any]) -> Optional[Any]:
    for item in metadata:
        if isinstance(item, (XmlAttribute, XmlText)):
            return item
    return None


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation
