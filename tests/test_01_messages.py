#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for message lookup and blank semantics."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json

import pytest

from pagenotice.services.messages import Message, MessageStore, MessageStoreError


# =============================================================================
# Blank messages
# =============================================================================

def test_missing_key_is_blank_not_error():
    msg = MessageStore().lookup("top-notice-Nowhere")
    assert not msg.exists()
    assert msg.is_blank()
    assert msg.plain_text() == ""


def test_empty_message_is_blank():
    assert MessageStore({"k": ""}).lookup("k").is_blank()


def test_whitespace_message_is_not_blank():
    assert not MessageStore({"k": "  \n "}).lookup("k").is_blank()


def test_dash_message_is_not_blank():
    msg = MessageStore({"k": "-"}).lookup("k")
    assert msg.exists()
    assert not msg.is_blank()
    assert msg.plain_text() == "-"


def test_text_message_is_not_blank():
    msg = MessageStore({"k": "Hello"}).lookup("k")
    assert not msg.is_blank()
    assert msg.plain_text() == "Hello"


# =============================================================================
# Parameters
# =============================================================================

def test_params_are_substituted():
    msg = MessageStore({"greet": "Hello $1, meet $2"}).lookup("greet", "Ity", "Fumo")
    assert msg.plain_text() == "Hello Ity, meet Fumo"


def test_unknown_param_left_in_place():
    msg = Message("k", "Cost: $3", ("a",))
    assert msg.plain_text() == "Cost: $3"


# =============================================================================
# Overrides and lookup log
# =============================================================================

def test_override_wins_over_default():
    store = MessageStore({"k": "default"})
    store.set("k", "override")
    assert store.lookup("k").plain_text() == "override"


def test_delete_override_restores_default():
    store = MessageStore({"k": "default"})
    store.set("k", "override")
    store.delete("k")
    assert store.lookup("k").plain_text() == "default"


def test_delete_unknown_key_is_noop():
    store = MessageStore()
    store.delete("missing")
    assert "missing" not in store


def test_lookups_are_recorded_in_order():
    store = MessageStore()
    store.lookup("a")
    store.lookup("b")
    assert store.lookups == ["a", "b"]


# =============================================================================
# JSON files
# =============================================================================

def test_from_json_skips_metadata(tmp_path):
    path = tmp_path / "en.json"
    path.write_text(json.dumps({
        "@metadata": {"authors": ["Daniel"]},
        "top-notice-global": "Read the rules",
    }), encoding="utf-8")
    store = MessageStore.from_json(path)
    assert store.lookup("top-notice-global").plain_text() == "Read the rules"
    assert "@metadata" not in store


def test_from_json_invalid_json_raises(tmp_path):
    path = tmp_path / "en.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MessageStoreError):
        MessageStore.from_json(path)


def test_from_json_non_object_raises(tmp_path):
    path = tmp_path / "en.json"
    path.write_text('["a", "b"]', encoding="utf-8")
    with pytest.raises(MessageStoreError):
        MessageStore.from_json(path)


def test_from_json_missing_file_raises(tmp_path):
    with pytest.raises(MessageStoreError):
        MessageStore.from_json(tmp_path / "nope.json")


# -----------------------------------------------------------------------------
