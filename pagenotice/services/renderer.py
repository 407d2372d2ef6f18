#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Notice markup renderer
======================
Renders notice message text to embeddable HTML, the same way page body
content is rendered.

Supported formats:
  - wikitext  : MediaWiki syntax subset (headings, lists, links, tables, code)
  - markdown  : rendered via mistune (with extras: tables, strikethrough, urls)

Both formats support:
  - ``<indicator name="...">...</indicator>`` page status indicators, which are
    removed from the body and returned separately
  - ``{{PAGENAME}}`` / ``{{FULLPAGENAME}}`` / ``{{NAMESPACENUMBER}}`` magic words
  - stripping of the outermost ``<p>`` so a one-line notice has no margins
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import re
from urllib.parse import quote

import mistune
from mistune.plugins.formatting import strikethrough
from mistune.plugins.table import table
from mistune.plugins.url import url
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from pagenotice.schemas import PageIdentity, RenderedFragment, normalize_db_key


FORMATS = ("wikitext", "markdown")


# -----------------------------------------------------------------------------
# Code highlighting via pygments
# -----------------------------------------------------------------------------

def _highlight_code(code: str, lang: str) -> str:
    """Highlight *code* using Pygments.  Unknown languages render as plain text."""
    try:
        lexer = get_lexer_by_name(lang.strip(), stripall=True) if lang.strip() else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
    return highlight(code, lexer, formatter)


# -----------------------------------------------------------------------------
# Markdown renderer via mistune
# -----------------------------------------------------------------------------

def _make_md_renderer():

    class _HighlightRenderer(mistune.HTMLRenderer):
        def codespan(self, code: str) -> str:
            return f'<code>{_html.escape(code)}</code>'

        def block_code(self, code: str, **kwargs) -> str:
            info = kwargs.get('info') or ''
            lang = info.split()[0] if info else ''
            if lang:
                return _highlight_code(code, lang)
            return f'<pre><code>{_html.escape(code)}</code></pre>'

    return mistune.create_markdown(
        renderer=_HighlightRenderer(escape=False),
        plugins=[table, strikethrough, url],
    )


# -----------------------------------------------------------------------------
# Links  [[Page Title]] → <a href="/wiki/Page_Title">
# -----------------------------------------------------------------------------

_WIKILINK_RE = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")
_CATEGORY_RE = re.compile(r"\[\[Category:[^\]]+\]\]\n?", re.IGNORECASE)


def _page_href(target: str, base_url: str) -> str:
    return f"{base_url}/wiki/{quote(normalize_db_key(target), safe=':/()_,!')}"


def _preprocess_wikilinks_md(content: str, base_url: str) -> str:
    """Convert [[...]] wikilinks to markdown links before rendering."""
    content = _CATEGORY_RE.sub("", content)

    def _replace(m: re.Match) -> str:
        target = m.group(1).strip()
        label  = (m.group(2) or target).strip()
        return f'[{label}]({_page_href(target, base_url)})'

    return _WIKILINK_RE.sub(_replace, content)


# -----------------------------------------------------------------------------
# Magic words
# -----------------------------------------------------------------------------

_MAGIC_RE = re.compile(r"\{\{\s*(PAGENAME|FULLPAGENAME|NAMESPACENUMBER)\s*\}\}")


def _expand_magic_words(content: str, page: PageIdentity) -> str:
    full = page.normalized_name.replace("_", " ")
    short = full.split(":", 1)[1] if page.namespace_id and ":" in full else full
    values = {
        "PAGENAME": short,
        "FULLPAGENAME": full,
        "NAMESPACENUMBER": str(page.namespace_id),
    }
    return _MAGIC_RE.sub(lambda m: _html.escape(values[m.group(1)]), content)


# -----------------------------------------------------------------------------
# Code blocks  <pre>...</pre> / <syntaxhighlight lang="x">...</syntaxhighlight>
# -----------------------------------------------------------------------------

_CODE_BLOCK_RE = re.compile(
    r"<(syntaxhighlight|pre)\b([^>]*)>(.*?)</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_LANG_ATTR_RE = re.compile(r"\blang\s*=\s*[\"']?([\w+-]+)", re.IGNORECASE)

# Private-use marks survive both renderers untouched
_CODE_MARK = "\ue000"
_CODE_TOKEN_RE = re.compile(
    rf"<p>\s*{_CODE_MARK}(\d+){_CODE_MARK}\s*</p>|{_CODE_MARK}(\d+){_CODE_MARK}"
)


def _protect_code_blocks(content: str) -> tuple[str, list[str]]:
    """Swap code blocks for placeholder paragraphs; return (content, rendered blocks).

    Runs before magic words and indicator extraction so code stays literal.
    """
    blocks: list[str] = []

    def _stash(m: re.Match) -> str:
        code = m.group(3).strip("\n")
        if m.group(1).lower() == "syntaxhighlight":
            lang = _LANG_ATTR_RE.search(m.group(2))
            blocks.append(_highlight_code(code, lang.group(1) if lang else ""))
        else:
            blocks.append(f"<pre>{_html.escape(code)}</pre>")
        return f"\n\n{_CODE_MARK}{len(blocks) - 1}{_CODE_MARK}\n\n"

    return _CODE_BLOCK_RE.sub(_stash, content), blocks


def _restore_code_blocks(html: str, blocks: list[str]) -> str:
    return _CODE_TOKEN_RE.sub(lambda m: blocks[int(m.group(1) or m.group(2))], html)


# -----------------------------------------------------------------------------
# Indicators  <indicator name="x">...</indicator>
# -----------------------------------------------------------------------------

_INDICATOR_RE = re.compile(
    r'<indicator\s+name\s*=\s*["\']([^"\']+)["\']\s*>(.*?)</indicator>',
    re.IGNORECASE | re.DOTALL,
)


def _extract_indicators(content: str) -> tuple[str, list[tuple[str, str]]]:
    """Remove indicator declarations from *content*; return (rest, [(name, body)])."""
    found: list[tuple[str, str]] = []

    def _take(m: re.Match) -> str:
        found.append((m.group(1).strip(), m.group(2).strip()))
        return ""

    return _INDICATOR_RE.sub(_take, content), found


# -----------------------------------------------------------------------------
# Wikitext (MediaWiki syntax) renderer
# -----------------------------------------------------------------------------

def _inline(text: str, base_url: str) -> str:
    text = _CATEGORY_RE.sub("", text)

    # External links: [URL Display Text] / [URL]
    text = re.sub(
        r"\[(\w+://[^\s\]]+)(?:\s+([^\]]+))?\]",
        lambda m: f'<a href="{m.group(1)}" class="external">{m.group(2) or m.group(1)}</a>',
        text,
    )
    # Bare URLs not already inside an anchor or brackets
    text = re.sub(
        r'(?<!["\'>=\[])(https?://[^\s<>\'"]+)(?=[\s<>\'"]|$)',
        lambda m: f'<a href="{m.group(1)}" class="external">{m.group(1)}</a>',
        text,
    )

    def _wl(m: re.Match) -> str:
        target = m.group(1).strip()
        label  = (m.group(2) or target).strip()
        return f'<a href="{_page_href(target, base_url)}" class="wikilink">{label}</a>'
    text = _WIKILINK_RE.sub(_wl, text)

    # Bold-italic before bold/italic individually
    text = re.sub(r"'{5}(.+?)'{5}", r"<b><i>\1</i></b>", text)
    text = re.sub(r"'{3}(.+?)'{3}", r"<b>\1</b>", text)
    text = re.sub(r"'{2}(.+?)'{2}", r"<i>\1</i>", text)

    return text


_CELL_ATTRS_RE = re.compile(r"^([^|]+)\|(?!\|)(.*)$")


def _table_cells(line: str, base_url: str) -> list[str]:
    """``! a !! b`` → header cells, ``| a || b`` → data cells; ``attrs | text`` per cell."""
    tag, sep = ("th", "!!") if line.startswith("!") else ("td", "||")
    cells: list[str] = []
    for part in line[1:].split(sep):
        part = part.strip()
        m = _CELL_ATTRS_RE.match(part)
        attrs, body = (m.group(1).strip(), m.group(2).strip()) if m else ("", part)
        open_tag = f"<{tag} {attrs}>" if attrs else f"<{tag}>"
        cells.append(f"{open_tag}{_inline(body, base_url)}</{tag}>")
    return cells


def _render_table(block: list[str], base_url: str) -> str:
    """``{| ... |}`` lines → ``<table>``.  ``|-`` starts a row, ``|+`` is the caption."""
    attrs = block[0][2:].strip()
    if "class=" not in attrs:
        attrs = f'class="wikitable" {attrs}'.strip()

    caption = ""
    rows: list[list[str]] = [[]]
    for raw in block[1:]:
        line = raw.strip()
        if line.startswith("|}"):
            break
        if line.startswith("|+"):
            caption = f"<caption>{_inline(line[2:].strip(), base_url)}</caption>"
        elif line.startswith("|-"):
            rows.append([])
        elif line.startswith(("|", "!")):
            rows[-1].extend(_table_cells(line, base_url))
        elif line and rows[-1]:
            # continues the previous cell
            head, _, tail = rows[-1][-1].rpartition("</t")
            rows[-1][-1] = f"{head} {_inline(line, base_url)}</t{tail}"

    body = "".join(f"<tr>{''.join(cells)}</tr>" for cells in rows if cells)
    return f"<table {attrs}>{caption}{body}</table>"


def _render_wikitext(content: str, base_url: str = "") -> str:
    """
    Convert the wikitext subset notices use to HTML.

    = H1 = … ====== H6 ======, '''bold''', ''italic'', [[links]], [ext links],
    ----, * / # lists and {| tables |}.  Everything else becomes <p> paragraphs.
    """
    lines = content.splitlines()
    out: list[str] = []
    lists: list[str] = []          # open list tags, innermost last
    para_buf: list[str] = []

    def _flush_para():
        if para_buf:
            out.append(f"<p>{'<br>'.join(_inline(l, base_url) for l in para_buf)}</p>")
            para_buf.clear()

    def _set_lists(markers: str):
        wanted = ["ul" if c == "*" else "ol" for c in markers]
        keep = 0
        while keep < min(len(lists), len(wanted)) and lists[keep] == wanted[keep]:
            keep += 1
        while len(lists) > keep:
            out.append(f"</{lists.pop()}>")
        for tag in wanted[keep:]:
            out.append(f"<{tag}>")
            lists.append(tag)

    i = 0
    while i < len(lines):
        line = _CATEGORY_RE.sub("", lines[i]).rstrip()
        i += 1

        if line.startswith("{|"):
            block = [line]
            while i < len(lines) and not block[-1].strip().startswith("|}"):
                block.append(lines[i])
                i += 1
            _flush_para()
            _set_lists("")
            out.append(_render_table(block, base_url))
            continue

        if not line.strip():
            _flush_para()
            _set_lists("")
            continue

        m = re.match(r"^(={1,6})\s*(.+?)\s*=+\s*$", line)
        if m:
            _flush_para()
            _set_lists("")
            level = len(m.group(1))
            out.append(f"<h{level}>{_inline(m.group(2), base_url)}</h{level}>")
            continue

        if re.match(r"^-{4,}\s*$", line):
            _flush_para()
            _set_lists("")
            out.append("<hr>")
            continue

        m = re.match(r"^([*#]+)\s*(.*)", line)
        if m:
            _flush_para()
            _set_lists(m.group(1))
            out.append(f"<li>{_inline(m.group(2), base_url)}</li>")
            continue

        _set_lists("")
        para_buf.append(line)

    _flush_para()
    _set_lists("")

    return "\n".join(out)


# -----------------------------------------------------------------------------
# Post-processors
# -----------------------------------------------------------------------------

_EXT_LINK_RE = re.compile(
    r'<a\s([^>]*href=["\'](?:https?://|//)[^"\'>][^>]*)>',
    re.IGNORECASE,
)


def _add_external_link_targets(html: str) -> str:
    """Add target="_blank" rel="noopener noreferrer" to all external <a> tags."""
    def _patch(m: re.Match) -> str:
        attrs = m.group(1)
        # Internal links carry an absolute href when base_url is set
        if "target=" in attrs or 'class="wikilink"' in attrs:
            return m.group(0)
        return f'<a {attrs} target="_blank" rel="noopener noreferrer">'
    return _EXT_LINK_RE.sub(_patch, html)


_OUTER_P_RE = re.compile(r"^<p>(.*?)\n?</p>\n?$", re.DOTALL)


def strip_outer_paragraph(html: str) -> str:
    """Remove the ``<p>`` around *html* when it is exactly one paragraph."""
    m = _OUTER_P_RE.match(html)
    if m and "</p>" not in m.group(1):
        return m.group(1)
    return html


# -----------------------------------------------------------------------------
# Public renderer
# -----------------------------------------------------------------------------

class MarkupRenderer:
    """
    Renders notice text for one request.

    Construct it once (``fmt`` is "wikitext" or "markdown") and hand it to the
    resolver; the markdown engine is built here, not on first use.
    """

    def __init__(self, fmt: str = "wikitext", base_url: str = ""):
        fmt = fmt.lower()
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported notice format {fmt!r}")
        self.fmt = fmt
        self.base_url = base_url.rstrip("/")
        self._md = _make_md_renderer() if fmt == "markdown" else None

    def _render_body(self, content: str, blocks: list[str]) -> str:
        if self._md is not None:
            html = self._md(_preprocess_wikilinks_md(content, self.base_url))
        else:
            html = _render_wikitext(content, self.base_url)
        html = _restore_code_blocks(_add_external_link_targets(html), blocks)
        return strip_outer_paragraph(html.strip())

    def render(self, page: PageIdentity, text: str) -> RenderedFragment:
        """Render *text* as if it were body content of *page*."""
        content, blocks = _protect_code_blocks(text)
        content = _expand_magic_words(content, page)
        content, declared = _extract_indicators(content)

        indicators: dict[str, str] = {}
        for name, body in declared:
            indicators[name] = self._render_body(body, blocks)

        return RenderedFragment(html=self._render_body(content, blocks), indicators=indicators)


# -----------------------------------------------------------------------------
