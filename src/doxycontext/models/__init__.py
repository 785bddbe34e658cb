from __future__ import annotations

from doxycontext.models.cache import PageCacheEntry
from doxycontext.models.docs import (
    ClassDetails,
    ClassInfo,
    FileInfo,
    FunctionInfo,
    InheritanceInfo,
    MethodInfo,
    ModuleInfo,
    NavigationStructure,
    PageContent,
    PageKind,
    ParameterInfo,
    PropertyInfo,
    Visibility,
)
from doxycontext.models.extraction import Extraction, ExtractionWarning
from doxycontext.models.index import MAX_BODY_CHARS, PageRecord, SearchIndex, SearchResult
from doxycontext.models.tools import (
    GetClassDetailsInput,
    GetClassDetailsOutput,
    GetNavigationOutput,
    GetPageContentInput,
    GetPageContentOutput,
    ListClassesOutput,
    ListFunctionsOutput,
    SearchDocsInput,
    SearchDocsOutput,
    SiteInput,
)

__all__ = [
    # docs
    "ClassInfo",
    "ClassDetails",
    "MethodInfo",
    "PropertyInfo",
    "InheritanceInfo",
    "ModuleInfo",
    "FileInfo",
    "FunctionInfo",
    "ParameterInfo",
    "NavigationStructure",
    "PageContent",
    "PageKind",
    "Visibility",
    # extraction
    "Extraction",
    "ExtractionWarning",
    # index
    "MAX_BODY_CHARS",
    "PageRecord",
    "SearchIndex",
    "SearchResult",
    # cache
    "PageCacheEntry",
    # tools
    "SiteInput",
    "SearchDocsInput",
    "SearchDocsOutput",
    "GetPageContentInput",
    "GetPageContentOutput",
    "ListClassesOutput",
    "ListFunctionsOutput",
    "GetNavigationOutput",
    "GetClassDetailsInput",
    "GetClassDetailsOutput",
]
