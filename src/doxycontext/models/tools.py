from __future__ import annotations

from pydantic import BaseModel, field_validator

from doxycontext.models.docs import (
    ClassDetails,
    ClassInfo,
    FunctionInfo,
    NavigationStructure,
    PageKind,
)
from doxycontext.models.extraction import ExtractionWarning
from doxycontext.models.index import SearchResult


class SiteInput(BaseModel):
    base_url: str | None = None

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        if len(v) > 2048:
            raise ValueError("base_url must not exceed 2048 characters")
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must use http or https scheme")
        return v.rstrip("/")


# ---------------------------------------------------------------------------
# search_docs
# ---------------------------------------------------------------------------


class SearchDocsInput(SiteInput):
    # Empty query and non-positive max_results are valid and yield no results
    query: str
    max_results: int = 10

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        if len(v) > 500:
            raise ValueError("query must not exceed 500 characters")
        return v


class SearchDocsOutput(BaseModel):
    site: str
    query: str
    results: list[SearchResult]


# ---------------------------------------------------------------------------
# get_page_content
# ---------------------------------------------------------------------------


class GetPageContentInput(SiteInput):
    path: str

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("path must not be empty")
        if len(v) > 2048:
            raise ValueError("path must not exceed 2048 characters")
        return v


class GetPageContentOutput(BaseModel):
    url: str
    kind: PageKind
    content: str


# ---------------------------------------------------------------------------
# list_classes / list_functions / get_navigation
# ---------------------------------------------------------------------------


class ListClassesOutput(BaseModel):
    site: str
    classes: list[ClassInfo]
    warnings: list[ExtractionWarning]


class ListFunctionsOutput(BaseModel):
    site: str
    functions: list[FunctionInfo]
    warnings: list[ExtractionWarning]


class GetNavigationOutput(BaseModel):
    site: str
    navigation: NavigationStructure
    warnings: list[ExtractionWarning]


# ---------------------------------------------------------------------------
# get_class_details
# ---------------------------------------------------------------------------


class GetClassDetailsInput(SiteInput):
    class_name: str

    @field_validator("class_name")
    @classmethod
    def validate_class_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("class_name must not be empty")
        if len(v) > 500:
            raise ValueError("class_name must not exceed 500 characters")
        return v


class GetClassDetailsOutput(BaseModel):
    site: str
    details: ClassDetails
