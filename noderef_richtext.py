#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Conversion of the HTML fragments found in API documentation into the text forms the generated artifacts need.

Node's documentation describes modules, methods and events with small HTML fragments (paragraphs, list items, headings,
inline code). Three renderings are produced from them:

1. `to_inline_comment` walks the fragment as a token stream and flattens it into a single line that is safe to place
   inside a double-quoted string literal: quotes, backslashes and newlines are escaped, list items are prefixed with
   "* ", and block-level elements are terminated with an escaped newline marker.
2. `to_plain_summary` keeps only the first line of a description, for the compact per-event listings.
3. `to_doc_comment` keeps the HTML as-is but replaces raw newlines with `&#10;`, so a description fits on a single
   `///` documentation comment line.
"""

from __future__ import annotations

from bs4 import (
    BeautifulSoup,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ParserRejectedMarkup,
    ProcessingInstruction,
    Tag,
)
from noderef_log import error
from typing import Iterator, Tuple


ESCAPED_NEWLINE = "\\r\\n"
LIST_ITEM_MARKER = "* "
BLOCK_ELEMENTS = frozenset(("p", "li", "h1", "h2", "h3", "h4", "h5"))

Token = Tuple[str, str]

_SKIPPED_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


# ---- Token stream -----------------------------------------------------------


def _walk(tag: Tag) -> Iterator[Token]:
    """
    Yield the start/text/end tokens for the children of `tag`, in document order.
    """

    for child in tag.children:
        if isinstance(child, Tag):
            yield ("start", child.name)
            yield from _walk(child)
            yield ("end", child.name)
        elif isinstance(child, NavigableString) and not isinstance(child, _SKIPPED_STRINGS):
            text = str(child)
            # Formatting whitespace between block elements
            if not text.strip() and "\n" in text:
                continue
            yield ("text", text)


def iter_tokens(html: str) -> Iterator[Token]:
    """
    Tokenise an HTML fragment into a stream of `(kind, value)` pairs.

    The fragment is wrapped in a synthetic `<html>` root so that bare text and sibling elements parse as a single
    document. The `html.parser` builder tolerates missing closing tags; elements left open are closed at the end of
    their parent.

    Parameters:
    - `html`: The HTML fragment.

    Yields:
    - `("start", tag_name)` on entering an element, `("text", text)` for character data (entities decoded) and
      `("end", tag_name)` on leaving an element. The synthetic root itself is not reported.
    """

    soup = BeautifulSoup(f"<html>{html}</html>", "html.parser")
    root = soup.find("html")
    if root is None:
        return
    yield from _walk(root)


# ---- Renderings -------------------------------------------------------------


def escape_text(text: str) -> str:
    """
    Escape text for inclusion in a double-quoted string literal.

    Backslashes and double quotes are backslash-escaped; CRLF and LF line breaks become the literal `\\r\\n` marker.
    """

    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r\n", ESCAPED_NEWLINE)
        .replace("\n", ESCAPED_NEWLINE)
    )


def strip_trailing_newlines(text: str) -> str:
    """
    Remove any trailing run of escaped newline markers.
    """

    while text.endswith(ESCAPED_NEWLINE):
        text = text[: -len(ESCAPED_NEWLINE)]
    return text


def to_inline_comment(html: str) -> str:
    """
    Flatten an HTML description into a single escaped line.

    List items are prefixed with "* ", text is escaped with `escape_text`, and the end of every paragraph, list item and
    heading (h1 to h5) appends an escaped newline marker. Trailing markers are trimmed.

    Parameters:
    - `html`: The HTML fragment, possibly empty.

    Returns:
    - The flattened text. If the fragment cannot be parsed the problem is reported and an empty string is returned, so
      one bad description never aborts the run.
    """

    out = []
    try:
        for kind, value in iter_tokens(html):
            if kind == "start":
                if value == "li":
                    out.append(LIST_ITEM_MARKER)
            elif kind == "text":
                out.append(escape_text(value))
            elif value in BLOCK_ELEMENTS:
                out.append(ESCAPED_NEWLINE)
    except (ParserRejectedMarkup, AssertionError, ValueError) as exc:
        error(f"Unable to parse description fragment ({exc}): {html[:60]!r}")
        return ""

    return strip_trailing_newlines("".join(out))


def to_plain_summary(html: str) -> str:
    """
    Return the first line of a description with its paragraph tags removed.

    Parameters:
    - `html`: The HTML description.

    Returns:
    - Everything before the first raw newline with `<p>`/`</p>` removed and " ..." appended, or the whole description
      with `<p>`/`</p>` removed if it holds no newline.
    """

    newline = html.find("\n")
    if newline != -1:
        return _strip_paragraph_tags(html[:newline]) + " ..."
    return _strip_paragraph_tags(html)


def _strip_paragraph_tags(text: str) -> str:
    return text.replace("<p>", "").replace("</p>", "")


def to_doc_comment(html: str) -> str:
    """
    Fit a description onto a single `///` comment line by encoding raw newlines as `&#10;`.
    """

    return html.replace("\r\n", "&#10;").replace("\n", "&#10;")
