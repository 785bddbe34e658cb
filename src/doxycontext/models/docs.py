"""Entities extracted from Doxygen-generated pages.

All records are frozen: re-extraction replaces them wholesale.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Visibility = Literal["public", "private", "protected"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class ClassInfo(_Record):
    """A class, struct or interface found on a listing page."""

    name: str
    url: str
    description: str = ""
    namespace: str | None = None
    section: str | None = None  # Listing page it was found on, e.g. "annotated.html"


class MethodInfo(_Record):
    name: str
    description: str = ""
    parameters: str = ""  # Raw text between the parentheses
    return_type: str = "void"
    visibility: Visibility = "public"


class PropertyInfo(_Record):
    name: str
    type: str = "unknown"
    description: str = ""
    visibility: Visibility = "public"


class InheritanceInfo(_Record):
    base_classes: list[str] = []
    derived_classes: list[str] = []


class ClassDetails(ClassInfo):
    """ClassInfo plus members and inheritance links.

    ``methods`` and ``properties`` keep markup order and are not deduplicated
    between the detail-block scan and the member-list scan.
    """

    methods: list[MethodInfo] = []
    properties: list[PropertyInfo] = []
    inheritance: InheritanceInfo = InheritanceInfo()


class ParameterInfo(_Record):
    name: str
    type: str = "unknown"
    description: str = ""


class FunctionInfo(_Record):
    name: str
    url: str
    description: str = ""
    signature: str = ""
    parameters: list[ParameterInfo] = []
    return_type: str = "void"


class ModuleInfo(_Record):
    name: str
    url: str
    description: str = ""
    # Not populated yet
    classes: list[ClassInfo] = []
    functions: list[FunctionInfo] = []


class FileInfo(_Record):
    name: str
    url: str
    description: str = ""
    path: str = ""
    # Not populated yet
    classes: list[ClassInfo] = []
    functions: list[FunctionInfo] = []


class NavigationStructure(_Record):
    main_page: str
    related_pages: list[str] = []
    modules: list[ModuleInfo] = []
    classes: list[ClassInfo] = []
    files: list[FileInfo] = []


PageKind = Literal["class", "function", "namespace", "file", "page", "module", "related"]


class PageContent(_Record):
    """Plain-text rendering of a single documentation page."""

    url: str
    kind: PageKind
    content: str
