"""Markdown rendering for chat bubbles."""

import html
import re

_LINK_CLASSES = "text-blue-600 dark:text-blue-400 hover:underline"

# Only these targets become clickable links
_SAFE_LINK = re.compile(r"^(https?://|mailto:)", re.IGNORECASE)


def _wrap_list_items(text: str, item_pattern: str, open_tag: str, close_tag: str) -> str:
    lines = text.split("\n")
    in_list = False
    result = []
    for line in lines:
        stripped = line.strip()
        if re.match(item_pattern, stripped):
            if not in_list:
                result.append(open_tag)
                in_list = True
            item = re.sub(item_pattern, "", stripped)
            result.append(f"<li>{item}</li>")
        else:
            if in_list:
                result.append(close_tag)
                in_list = False
            result.append(line)
    if in_list:
        result.append(close_tag)
    return "\n".join(result)


def _render_link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2)
    if not _SAFE_LINK.match(url):
        return label
    return (
        f'<a href="{url}" class="{_LINK_CLASSES}" target="_blank" '
        f'rel="noopener noreferrer">🔗 {label}</a>'
    )


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    Links open in a new tab and are prefixed with a link marker.
    """
    # Escape HTML entities first, quotes included so URLs cannot leave href
    text = html.escape(text, quote=True)

    # Code blocks (```code```)
    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )

    # Inline code (`code`)
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 dark:bg-gray-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )

    # Bold (**text** or __text__)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)

    # Italic (*text*); underscores are common in file names, so only asterisks
    text = re.sub(r"\*([^*\n]+)\*", r"<em>\1</em>", text)

    # Links [text](url)
    text = re.sub(r"\[([^\]]+)\]\(([^)\s]+)\)", _render_link, text)

    text = _wrap_list_items(
        text, r"^[-*]\s+", '<ul class="list-disc list-inside my-2 space-y-1">', "</ul>"
    )
    text = _wrap_list_items(
        text, r"^\d+\.\s+", '<ol class="list-decimal list-inside my-2 space-y-1">', "</ol>"
    )

    # Line breaks (preserve newlines as <br>)
    return text.replace("\n", "<br>")
