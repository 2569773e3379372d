"""Minimal Markdown handling for generated copy.

``render_markdown`` is a line classifier, not a Markdown parser: each line is
rendered on its own, so multi-line constructs (nested lists, fenced code,
tables) are not grouped.
"""

import html
import re

_LINE_RULES: list[tuple[str, str]] = [
    ("# ", '<h1 class="md-h1">{}</h1>'),
    ("## ", '<h2 class="md-h2">{}</h2>'),
    ("### ", '<h3 class="md-h3">{}</h3>'),
    ("- ", '<li class="md-li">{}</li>'),
    ("> ", '<blockquote class="md-quote">{}</blockquote>'),
]

_STRIP_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^#+\s+", re.MULTILINE), ""),  # headers
    (re.compile(r"(\*\*|__)(.*?)\1"), r"\2"),  # bold
    (re.compile(r"(\*|_)(.*?)\1"), r"\2"),  # italic
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),  # links
    (re.compile(r"^>\s+", re.MULTILINE), ""),  # blockquotes
    (re.compile(r"`{3}[\s\S]*?`{3}"), ""),  # fenced code
    (re.compile(r"`(.+?)`"), r"\1"),  # inline code
    (re.compile(r"^\s*-\s+", re.MULTILINE), ""),  # unordered lists
    (re.compile(r"^\s*\d+\.\s+", re.MULTILINE), ""),  # ordered lists
    (re.compile(r"\n{3,}"), "\n\n"),
]


def render_line(line: str) -> str:
    """Render a single Markdown line to an HTML element."""
    for prefix, template in _LINE_RULES:
        if line.startswith(prefix):
            return template.format(html.escape(line.replace(prefix, "", 1)))

    if line.startswith("|"):
        return f'<div class="md-table-row" style="font-family: monospace; white-space: pre;">{html.escape(line)}</div>'

    if line.strip() == "---":
        return '<hr class="md-hr"/>'

    return f'<p class="md-p" style="white-space: pre-wrap;">{html.escape(line)}</p>'


def render_markdown(content: str | None) -> str:
    """Render Markdown text to HTML one line at a time.

    Args:
        content: Markdown source. Empty or None renders to an empty string.

    Returns:
        HTML fragment wrapped in a ``div.md-body`` container.
    """
    if not content:
        return ""

    body = "\n".join(render_line(line) for line in content.split("\n"))
    return f'<div class="md-body">\n{body}\n</div>'


def strip_markdown(text: str | None) -> str:
    """Remove Markdown syntax for pasting into plain-text editors."""
    if not text:
        return ""

    for pattern, replacement in _STRIP_RULES:
        text = pattern.sub(replacement, text)
    return text
