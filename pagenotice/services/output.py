#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Output page — the per-request buffer that notices are written into.

Holds the accumulated body HTML, the style assets the page needs and the page
status indicators.  The host owns it; the resolver only appends.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
from typing import Mapping


# -----------------------------------------------------------------------------

class OutputPage:

    def __init__(self, base_url: str = ""):
        self.base_url = base_url.rstrip("/")
        self._html: list[str] = []
        self._style_assets: list[str] = []
        self._indicators: dict[str, str] = {}

    # ── body ──────────────────────────────────────────────────────────────

    def append_html(self, fragment: str) -> None:
        self._html.append(fragment)

    def get_html(self) -> str:
        return "".join(self._html)

    # ── style assets ──────────────────────────────────────────────────────

    def register_style_asset(self, name: str) -> None:
        """Add *name* to the page's style assets; registering twice is a no-op."""
        if name not in self._style_assets:
            self._style_assets.append(name)

    def get_style_assets(self) -> list[str]:
        return list(self._style_assets)

    def head_links(self) -> str:
        """``<link>`` tags for every registered style asset, in registration order."""
        return "\n".join(
            f'<link rel="stylesheet" href="{self.base_url}/static/{_html.escape(name)}.css">'
            for name in self._style_assets
        )

    # ── indicators ────────────────────────────────────────────────────────

    def merge_indicators(self, indicators: Mapping[str, str]) -> None:
        self._indicators.update(indicators)

    def get_indicators(self) -> dict[str, str]:
        return dict(sorted(self._indicators.items()))


# -----------------------------------------------------------------------------
