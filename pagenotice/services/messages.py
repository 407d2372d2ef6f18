#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Message service — look up interface messages by key.

Defaults come from an i18n-style JSON file (``{"key": "text", ...}``, keys
starting with ``@`` are metadata); overrides set at runtime win over them.
A missing key is never an error: it yields a blank ``Message``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Optional

log = logging.getLogger(__name__)

_PARAM_RE = re.compile(r"\$(\d+)")


# -----------------------------------------------------------------------------

class MessageStoreError(Exception):
    """Raised when a messages file cannot be read or is not a JSON object."""


# -----------------------------------------------------------------------------

class Message:
    """The result of one lookup.  ``text`` is None when the key does not exist."""

    def __init__(self, key: str, text: Optional[str], params: Iterable[object] = ()):
        self.key = key
        self.text = text
        self.params = tuple(params)

    def __repr__(self) -> str:
        return f"Message({self.key!r}, {self.text!r})"

    def exists(self) -> bool:
        return self.text is not None

    def is_blank(self) -> bool:
        """Missing or empty.  Whitespace-only text still counts as a notice."""
        return self.text is None or self.text == ""

    def plain_text(self) -> str:
        """Raw text with ``$1``, ``$2`` … replaced by the lookup params."""
        if self.text is None:
            return ""

        def _sub(m: re.Match) -> str:
            idx = int(m.group(1)) - 1
            if 0 <= idx < len(self.params):
                return str(self.params[idx])
            return m.group(0)

        return _PARAM_RE.sub(_sub, self.text)


# -----------------------------------------------------------------------------

class MessageStore:

    def __init__(self, defaults: Optional[Mapping[str, str]] = None):
        self._defaults: dict[str, str] = dict(defaults or {})
        self._overrides: dict[str, str] = {}
        self.lookups: list[str] = []

    @classmethod
    def from_json(cls, path: Path | str) -> "MessageStore":
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise MessageStoreError(f"Cannot read messages file {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise MessageStoreError(f"Invalid JSON in messages file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise MessageStoreError(f"Messages file {path} must contain a JSON object")

        messages = {
            k: v for k, v in data.items()
            if not k.startswith("@") and isinstance(v, str)
        }
        log.info("Loaded %d messages from %s", len(messages), path)
        return cls(messages)

    # ── overrides ─────────────────────────────────────────────────────────

    def set(self, key: str, text: str) -> None:
        self._overrides[key] = text

    def delete(self, key: str) -> None:
        """Drop an override; the file default (if any) becomes visible again."""
        self._overrides.pop(key, None)

    # ── lookup ────────────────────────────────────────────────────────────

    def lookup(self, key: str, *params: object) -> Message:
        self.lookups.append(key)
        if key in self._overrides:
            text: Optional[str] = self._overrides[key]
        else:
            text = self._defaults.get(key)
        return Message(key, text, params)

    def __contains__(self, key: str) -> bool:
        return key in self._overrides or key in self._defaults


# -----------------------------------------------------------------------------
