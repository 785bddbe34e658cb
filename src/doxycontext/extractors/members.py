"""Class detail pages: members and inheritance.

Members are collected by two independent scans:

1. ``.memitem`` detail blocks (prototype + documentation), first 15.
2. ``.memberdecls`` summary cells, first 10.

The second scan is not deduplicated against the first, so a member
documented in both places appears twice.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from doxycontext.extractors import tokens
from doxycontext.extractors.markup import text_of
from doxycontext.models.docs import ClassDetails, InheritanceInfo, MethodInfo, PropertyInfo

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from doxycontext.models.docs import ClassInfo

MAX_DETAIL_BLOCKS = 15
MAX_MEMBER_CELLS = 10

_MEMBER_CELL_SELECTOR = ".memberdecls .memItemLeft, .memberdecls .memItemRight"

_INHERITS_RE = re.compile(r"Inherits\s+(.+)")
_INHERITED_BY_RE = re.compile(r"Inherited by\s+(.+)")


def _method(prototype: str, description: str) -> MethodInfo:
    return MethodInfo(
        name=tokens.method_name(prototype),
        description=description,
        parameters=tokens.parameters(prototype),
        return_type=tokens.return_type(prototype),
        visibility=tokens.visibility(prototype),
    )


def _property(declaration: str, description: str) -> PropertyInfo:
    return PropertyInfo(
        name=tokens.property_name(declaration),
        type=tokens.property_type(declaration),
        description=description,
        visibility=tokens.visibility(declaration),
    )


def scan_detail_blocks(
    soup: BeautifulSoup,
    methods: list[MethodInfo],
    properties: list[PropertyInfo],
) -> None:
    for item in soup.select(".memitem")[:MAX_DETAIL_BLOCKS]:
        prototype = item.select_one(".memproto")
        doc = item.select_one(".memdoc")
        if prototype is None or doc is None:
            continue
        prototype_text = text_of(prototype)
        doc_text = text_of(doc)
        if tokens.is_callable(prototype_text):
            methods.append(_method(prototype_text, doc_text))
        else:
            properties.append(_property(prototype_text, doc_text))


def scan_member_list(
    soup: BeautifulSoup,
    methods: list[MethodInfo],
    properties: list[PropertyInfo],
) -> None:
    for cell in soup.select(_MEMBER_CELL_SELECTOR)[:MAX_MEMBER_CELLS]:
        text = text_of(cell)
        if not text:
            continue
        description = text_of(cell.find_next_sibling())
        if tokens.is_callable(text):
            method = _method(text, description)
            if method.name != tokens.UNKNOWN:
                methods.append(method)
        elif "typedef" not in text and "#define" not in text:
            prop = _property(text, description)
            if prop.name != tokens.UNKNOWN:
                properties.append(prop)


def _inherit_lines(soup: BeautifulSoup, pattern: re.Pattern[str], marker: str) -> list[str]:
    names: list[str] = []
    for element in soup.select(".inherit"):
        text = element.get_text()
        if marker not in text:
            continue
        match = pattern.search(text)
        if match:
            names.extend(part.strip() for part in match.group(1).split(","))
    return names


def extract_inheritance(soup: BeautifulSoup) -> InheritanceInfo:
    return InheritanceInfo(
        base_classes=_inherit_lines(soup, _INHERITS_RE, "Inherits"),
        derived_classes=_inherit_lines(soup, _INHERITED_BY_RE, "Inherited by"),
    )


def extract_class_details(soup: BeautifulSoup, info: ClassInfo) -> ClassDetails:
    methods: list[MethodInfo] = []
    properties: list[PropertyInfo] = []
    scan_detail_blocks(soup, methods, properties)
    scan_member_list(soup, methods, properties)

    return ClassDetails(
        **info.model_dump(),
        methods=methods,
        properties=properties,
        inheritance=extract_inheritance(soup),
    )
