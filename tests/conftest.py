#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for PageNotice tests.
Everything is in memory: a dict-backed message store and a fresh output page.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os

import pytest

from pagenotice.core.config import Settings
from pagenotice.schemas import PageIdentity
from pagenotice.services.messages import MessageStore
from pagenotice.services.notices import NoticeResolver
from pagenotice.services.output import OutputPage
from pagenotice.services.renderer import MarkupRenderer


# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer PAGENOTICE_* variables out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("PAGENOTICE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def output() -> OutputPage:
    return OutputPage()


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

def make_settings(disable_per_page: bool = False, **kwargs) -> Settings:
    return Settings(_env_file=None, disable_per_page_notices=disable_per_page, **kwargs)


def make_resolver(messages: dict[str, str], disable_per_page: bool = False,
                  fmt: str = "wikitext") -> NoticeResolver:
    settings = make_settings(disable_per_page, notice_format=fmt)
    return NoticeResolver(settings, MessageStore(messages), MarkupRenderer(fmt))


def page(title: str, namespace_id: int = 0) -> PageIdentity:
    return PageIdentity.from_title(title, namespace_id)


def add_notices(resolver: NoticeResolver, title: str, output: OutputPage,
                namespace_id: int = 0) -> None:
    """Run both positions the way a page view does: top, then bottom."""
    p = page(title, namespace_id)
    resolver.resolve_and_emit(p, "top", output)
    resolver.resolve_and_emit(p, "bottom", output)


# -----------------------------------------------------------------------------
