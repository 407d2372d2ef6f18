#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 models for the values passed between the host and the resolver.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Namespaces
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# MediaWiki canonical namespace numbers
NS_MAIN = 0

CANONICAL_NAMESPACES: dict[int, str] = {
    0:  "",
    1:  "Talk",
    2:  "User",
    3:  "User_talk",
    4:  "Project",
    5:  "Project_talk",
    6:  "File",
    7:  "File_talk",
    8:  "MediaWiki",
    9:  "MediaWiki_talk",
    10: "Template",
    11: "Template_talk",
    12: "Help",
    13: "Help_talk",
    14: "Category",
    15: "Category_talk",
}


def normalize_db_key(text: str) -> str:
    """Title text → DB key: trimmed, spaces as underscores, first letter upper-cased."""
    key = re.sub(r"[\s_]+", "_", text.strip()).strip("_")
    return key[:1].upper() + key[1:]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Positions
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Position(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"

    @classmethod
    def coerce(cls, value: "Position | str") -> "Position":
        """Accept a ``Position`` or its string value; anything else is a caller bug."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown notice position {value!r}; expected 'top' or 'bottom'"
            ) from None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    normalized_name: str = Field(..., min_length=1)
    namespace_id: int = Field(default=NS_MAIN, ge=0)

    @field_validator("normalized_name")
    @classmethod
    def name_has_no_spaces(cls, v: str) -> str:
        if re.search(r"\s", v):
            raise ValueError("normalized_name must use underscores, not whitespace")
        return v

    @classmethod
    def from_title(cls, title: str, namespace_id: int = NS_MAIN) -> "PageIdentity":
        """Build the prefixed DB key for *title* in *namespace_id*.

        ``from_title("Catboys are cute")``  → ``Catboys_are_cute`` (ns 0)
        ``from_title("foo bar", 1)``        → ``Talk:Foo_bar``    (ns 1)
        """
        if namespace_id not in CANONICAL_NAMESPACES:
            raise ValueError(f"Unknown namespace id {namespace_id}")
        key = normalize_db_key(title)
        prefix = CANONICAL_NAMESPACES[namespace_id]
        name = f"{prefix}:{key}" if prefix else key
        return cls(normalized_name=name, namespace_id=namespace_id)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Notice sources
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class NoticeSource(str, Enum):
    PER_PAGE = "page"
    PER_NAMESPACE = "namespace"
    GLOBAL = "global"

    def message_key(self, position: Position, page: PageIdentity) -> str:
        if self is NoticeSource.PER_PAGE:
            return f"{position.value}-notice-{page.normalized_name}"
        if self is NoticeSource.PER_NAMESPACE:
            return f"{position.value}-notice-ns-{page.namespace_id}"
        return f"{position.value}-notice-global"

    def container_id(self, position: Position) -> Optional[str]:
        """Element id kept for skins and user CSS that target the old markup."""
        if self is NoticeSource.PER_PAGE:
            return f"{position.value}-notice"
        if self is NoticeSource.PER_NAMESPACE:
            return f"{position.value}-notice-ns"
        return None

    @property
    def needs_styles(self) -> bool:
        return self is not NoticeSource.GLOBAL


# Lookup and emission order within one position
SOURCE_ORDER: tuple[NoticeSource, ...] = (
    NoticeSource.PER_PAGE,
    NoticeSource.PER_NAMESPACE,
    NoticeSource.GLOBAL,
)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderedFragment(BaseModel):
    html: str
    indicators: dict[str, str] = Field(default_factory=dict)


# -----------------------------------------------------------------------------
