#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Notice resolver — decide which notices apply to a page view and emit them.

For one position ("top" or "bottom") up to three messages are consulted, in
this order:

  {position}-notice-{Prefixed_page_key}   per page (unless disabled)
  {position}-notice-ns-{namespace id}     per namespace
  {position}-notice-global                site wide

Non-blank ones are rendered and written to the output inside a single
``ext-pagenotice-{position}-notices`` container.  Per-page and per-namespace
notices keep their historical ``id="{position}-notice[-ns]"`` wrapper and pull
in the extension's style module; the global notice does neither.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from pagenotice.core.config import Settings
from pagenotice.schemas import SOURCE_ORDER, NoticeSource, PageIdentity, Position
from pagenotice.services.messages import MessageStore
from pagenotice.services.output import OutputPage
from pagenotice.services.renderer import MarkupRenderer

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class NoticeResolver:

    def __init__(self, settings: Settings, messages: MessageStore, renderer: MarkupRenderer):
        self.settings = settings
        self.messages = messages
        self.renderer = renderer

    def _sources(self) -> list[NoticeSource]:
        if self.settings.disable_per_page_notices:
            return [s for s in SOURCE_ORDER if s is not NoticeSource.PER_PAGE]
        return list(SOURCE_ORDER)

    def resolve_and_emit(
        self,
        page: PageIdentity,
        position: Position | str,
        output: OutputPage,
    ) -> None:
        position = Position.coerce(position)

        if self.settings.disable_per_page_notices:
            log.debug("Per-page notices disabled; skipping %s lookup for %s",
                      position.value, page.normalized_name)

        fragments: list[str] = []
        need_styles = False

        for source in self._sources():
            message = self.messages.lookup(source.message_key(position, page))
            if message.is_blank():
                continue

            rendered = self.renderer.render(page, message.plain_text())
            output.merge_indicators(rendered.indicators)

            container_id = source.container_id(position)
            if container_id is None:
                fragments.append(rendered.html)
            else:
                fragments.append(f'<div id="{container_id}">{rendered.html}</div>')

            need_styles = need_styles or source.needs_styles
            log.debug("Emitting %s notice %r", source.value, message.key)

        if fragments:
            output.append_html(
                f'<div class="ext-pagenotice-{position.value}-notices">'
                + "".join(fragments)
                + '</div>'
            )

        if need_styles:
            output.register_style_asset(self.settings.style_module)


# -----------------------------------------------------------------------------
