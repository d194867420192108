#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Syntax check of generated stub JavaScript using Tree-sitter.

The stub artifact is only useful if the consuming analyser can parse it, and a single stray brace in a hand-written body
or an odd documented name makes the whole file unusable. `find_syntax_errors` parses the generated text with the
Tree-sitter JavaScript grammar and reports every error or missing node with its position.
"""

from __future__ import annotations

from dataclasses import dataclass
from tree_sitter import Language, Parser
from tree_sitter_javascript import language as js_language
from typing import Any, List, Optional, Tuple


# ---- Tree-sitter setup ------------------------------------------------------


def _load_js_language_and_parser() -> Tuple[Language, Parser]:
    """
    Load the JavaScript language and parser.

    This function initialises the JavaScript language and parser, handling the constructor differences between
    Tree-sitter binding versions.

    Returns:
        A tuple containing the loaded `Language` instance and the initialised `Parser` instance.
    """

    ptr_or_lang: Any = js_language()

    # Wrap capsule -> Language, or accept Language directly.
    if isinstance(ptr_or_lang, Language):
        lang = ptr_or_lang
    else:
        try:
            lang = Language(ptr_or_lang)
        except TypeError:
            # Older bindings also want a label for the language
            lang = Language(ptr_or_lang, "JavaScript")

    try:
        p = Parser(lang)
    except TypeError:
        # Classic API: no-argument constructor, language set afterwards
        p = Parser()
        p.set_language(lang)

    return lang, p


_PARSER: Optional[Parser] = None


def _parser() -> Parser:
    global _PARSER

    if _PARSER is None:
        _, _PARSER = _load_js_language_and_parser()
    return _PARSER


def _point(point) -> Tuple[int, int]:
    """
    Return the 0-based (row, column) of a Tree-sitter point, which is an object or a tuple depending on the version.
    """

    try:
        return point.row, point.column
    except AttributeError:
        return point[0], point[1]


# ---- Checking ---------------------------------------------------------------


@dataclass(frozen=True)
class SyntaxIssue:
    """
    A syntax problem found in generated JavaScript.

    Attributes:
        line (int): 1-based line number.
        column (int): 1-based column number.
        message (str): Description, including the offending source text where there is any.
    """

    line: int
    column: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"


def find_syntax_errors(source: str) -> List[SyntaxIssue]:
    """
    Parse JavaScript source and report its syntax errors.

    Parameters:
    - `source`: The JavaScript source text.

    Returns:
    - The issues in source order; an empty list if the source parses cleanly.
    """

    source_bytes = source.encode("utf-8", errors="replace")
    tree = _parser().parse(source_bytes)
    root = tree.root_node
    if not root.has_error:
        return []

    issues: List[SyntaxIssue] = []
    stack = [root]
    while stack:
        n = stack.pop()
        if not n.has_error and not n.is_missing:
            continue

        row, col = _point(n.start_point)
        if n.is_missing:
            issues.append(SyntaxIssue(row + 1, col + 1, f"missing '{n.type}'"))
        elif n.type == "ERROR":
            text = source_bytes[n.start_byte:n.end_byte].decode("utf-8", errors="replace")
            first_line = text.split("\n", 1)[0].strip()
            issues.append(SyntaxIssue(row + 1, col + 1, f"unexpected '{first_line[:40]}'"))

        for i in range(n.child_count - 1, -1, -1):
            stack.append(n.child(i))

    issues.sort(key=lambda issue: (issue.line, issue.column))
    return issues
