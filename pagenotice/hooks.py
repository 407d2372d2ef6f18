#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Host entry points.

The host calls ``on_article_view_header`` before the page body is rendered and
``on_article_view_footer`` after it, both against the same ``OutputPage``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from pagenotice.core.config import Settings, get_settings
from pagenotice.schemas import PageIdentity, Position
from pagenotice.services.messages import MessageStore
from pagenotice.services.notices import NoticeResolver
from pagenotice.services.output import OutputPage
from pagenotice.services.renderer import MarkupRenderer


# -----------------------------------------------------------------------------

def build_resolver(
    settings: Optional[Settings] = None,
    messages: Optional[MessageStore] = None,
) -> NoticeResolver:
    """Wire a request-scoped resolver.  Loads ``settings.messages_file`` if no store is given."""
    settings = settings or get_settings()
    if messages is None:
        if settings.messages_file is not None:
            messages = MessageStore.from_json(settings.messages_file)
        else:
            messages = MessageStore()
    renderer = MarkupRenderer(settings.notice_format, base_url=settings.base_url)
    return NoticeResolver(settings, messages, renderer)


# -----------------------------------------------------------------------------

def on_article_view_header(page: PageIdentity, output: OutputPage, resolver: NoticeResolver) -> None:
    resolver.resolve_and_emit(page, Position.TOP, output)


def on_article_view_footer(page: PageIdentity, output: OutputPage, resolver: NoticeResolver) -> None:
    resolver.resolve_and_emit(page, Position.BOTTOM, output)


# -----------------------------------------------------------------------------
