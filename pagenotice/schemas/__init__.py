from pagenotice.schemas.schemas import (
    NS_MAIN, CANONICAL_NAMESPACES,
    Position,
    PageIdentity,
    NoticeSource, SOURCE_ORDER,
    RenderedFragment,
    normalize_db_key,
)

__all__ = [
    "NS_MAIN", "CANONICAL_NAMESPACES",
    "Position",
    "PageIdentity",
    "NoticeSource", "SOURCE_ORDER",
    "RenderedFragment",
    "normalize_db_key",
]
