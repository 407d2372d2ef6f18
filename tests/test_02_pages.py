#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for page identities, positions and message keys."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pagenotice.schemas import NoticeSource, PageIdentity, Position, normalize_db_key


# =============================================================================
# Title normalisation
# =============================================================================

def test_spaces_become_underscores():
    assert PageIdentity.from_title("Catboys are cute").normalized_name == "Catboys_are_cute"


def test_first_letter_upper_cased():
    assert normalize_db_key("foxgirls") == "Foxgirls"


def test_surrounding_whitespace_trimmed():
    assert normalize_db_key("  Be gay  do crime ") == "Be_gay_do_crime"


def test_namespace_prefix_added():
    p = PageIdentity.from_title("foo bar", 1)
    assert p.normalized_name == "Talk:Foo_bar"
    assert p.namespace_id == 1


def test_unknown_namespace_rejected():
    with pytest.raises(ValueError):
        PageIdentity.from_title("Foo", 9999)


def test_negative_namespace_rejected():
    with pytest.raises(ValidationError):
        PageIdentity(normalized_name="Foo", namespace_id=-1)


def test_name_with_spaces_rejected():
    with pytest.raises(ValidationError):
        PageIdentity(normalized_name="Foo bar")


def test_page_identity_is_immutable():
    p = PageIdentity.from_title("Ity")
    with pytest.raises(ValidationError):
        p.namespace_id = 2


# =============================================================================
# Positions
# =============================================================================

def test_position_accepts_strings():
    assert Position.coerce("top") is Position.TOP
    assert Position.coerce("bottom") is Position.BOTTOM


def test_position_rejects_unknown():
    with pytest.raises(ValueError, match="middle"):
        Position.coerce("middle")


# =============================================================================
# Message keys
# =============================================================================

def test_message_keys():
    p = PageIdentity.from_title("Ity")
    assert NoticeSource.PER_PAGE.message_key(Position.TOP, p) == "top-notice-Ity"
    assert NoticeSource.PER_NAMESPACE.message_key(Position.BOTTOM, p) == "bottom-notice-ns-0"
    assert NoticeSource.GLOBAL.message_key(Position.TOP, p) == "top-notice-global"


def test_container_ids():
    assert NoticeSource.PER_PAGE.container_id(Position.TOP) == "top-notice"
    assert NoticeSource.PER_NAMESPACE.container_id(Position.BOTTOM) == "bottom-notice-ns"
    assert NoticeSource.GLOBAL.container_id(Position.TOP) is None


# -----------------------------------------------------------------------------
