"""Lightweight tokenisation of member prototype text.

Prototypes come from ``.memproto`` blocks and member-list cells, e.g.
``"int computeSum(int a, int b)"`` or ``"static const int MAX_SIZE"``. No
grammar is applied: the rules below are deliberately shallow so they survive
any language Doxygen documents.
"""

from __future__ import annotations

import re

from doxycontext.models.docs import ParameterInfo, Visibility

UNKNOWN = "unknown"

_METHOD_NAME_RE = re.compile(r"(\w+)\s*\(")
_PARAMETERS_RE = re.compile(r"\((.*?)\)")


def is_callable(text: str) -> bool:
    """True when the text carries a parenthesised argument list."""
    return "(" in text and ")" in text


def method_name(prototype: str) -> str:
    """First identifier immediately followed by ``(``."""
    match = _METHOD_NAME_RE.search(prototype)
    return match.group(1) if match else UNKNOWN


def return_type(prototype: str) -> str:
    """Tokens before the opening parenthesis, minus the method name."""
    before_paren = prototype.split("(", 1)[0]
    parts = before_paren.split()
    return " ".join(parts[:-1]) or "void"


def parameters(prototype: str) -> str:
    """Raw text of the first parenthesised group, unparsed."""
    match = _PARAMETERS_RE.search(prototype)
    return match.group(1) if match else ""


def parse_parameters(prototype: str) -> list[ParameterInfo]:
    """Split the first parameter list into name/type pairs.

    Each comma-separated piece contributes its last token as the name and
    the preceding tokens as the type.
    """
    raw = parameters(prototype)
    if not raw.strip():
        return []

    params: list[ParameterInfo] = []
    for piece in raw.split(","):
        parts = piece.split()
        params.append(
            ParameterInfo(
                name=parts[-1] if parts else UNKNOWN,
                type=" ".join(parts[:-1]) or UNKNOWN,
            )
        )
    return params


def property_name(declaration: str) -> str:
    parts = declaration.split()
    return parts[-1] if parts else UNKNOWN


def property_type(declaration: str) -> str:
    parts = declaration.split()
    return " ".join(parts[:-1]) or UNKNOWN


def visibility(text: str) -> Visibility:
    # Unannotated members are reported as public
    if "private" in text:
        return "private"
    if "protected" in text:
        return "protected"
    return "public"
