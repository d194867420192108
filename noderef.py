#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

This program generates IntelliSense reference material from Node.js API documentation. It reads the documentation tree
(`all.json`, as produced by Node's documentation tooling) and produces two artifacts:

1. **Stub JavaScript** (`all.js`): inert stand-ins for every documented module, class, method, property and event,
   annotated with `///` documentation comments and tied together by a lazy `require` loader, so that a static analyser
   can model the runtime API surface.
2. **Module description table** (`modules.cs`, or JSON): the normalized module names with their descriptions as plain
   escaped text, for the `require('...')` completion list.

# Highlights of Internal Workings

1. **Typed model**: the JSON is converted once into frozen dataclasses (`noderef_model`); structural problems are
   reported before anything is generated and abort the run without writing any output.
2. **Pure generation**: `generate_artifacts` turns a `DocTree` into both texts; each artifact is accumulated in its own
   buffer and the result is deterministic.
3. **Optional check**: with `--check`, the stub JavaScript is parsed with Tree-sitter before being written.
"""

from __future__ import annotations

from dataclasses import dataclass
from noderef_check import find_syntax_errors
from noderef_doctable import build_doc_table, render_csharp_table, render_json_table
from noderef_log import echo, error, set_verbosity
from noderef_model import DocTree, DocTreeError, load_doc_tree
from noderef_require import RequireShimEmitter
from noderef_stubs import SourceWriter, StubEmitter
from pathlib import Path
from typing import Optional, Sequence
import argparse
import json


TABLE_FORMATS = ("csharp", "json")


@dataclass(frozen=True)
class ReferenceArtifacts:
    """
    The two generated texts.

    Attributes:
        javascript (str): The stub JavaScript source.
        doc_table (str): The rendered module description table.
    """

    javascript: str
    doc_table: str


# ---- Generation -------------------------------------------------------------


def generate_javascript(tree: DocTree) -> str:
    """
    Generate the stub JavaScript: the `global` object, the global-object declarations, then the `require` loader.
    """

    out = SourceWriter()
    stubs = StubEmitter(out)

    out.line(0, "global = {};")
    stubs.emit_globals(tree.globals)
    RequireShimEmitter(out, stubs).emit(tree.modules)

    return out.text()


def generate_doc_table(tree: DocTree, table_format: str = "csharp") -> str:
    """
    Generate the module description table in the requested format ("csharp" or "json").
    """

    entries = build_doc_table(tree)
    if table_format == "json":
        return render_json_table(entries)
    if table_format == "csharp":
        return render_csharp_table(entries)
    raise ValueError(f"Unsupported table format '{table_format}'")


def generate_artifacts(tree: DocTree, table_format: str = "csharp") -> ReferenceArtifacts:
    """
    Generate both artifacts from a documentation tree.

    Parameters:
    - `tree`: The documentation tree.
    - `table_format`: Rendering of the description table, "csharp" (default) or "json".

    Returns:
    - The `ReferenceArtifacts`. Running twice on the same tree gives identical texts.
    """

    echo(f"Generating stubs for {len(tree.modules)} modules and {len(tree.globals)} global objects...")
    javascript = generate_javascript(tree)

    echo("Generating module description table...")
    doc_table = generate_doc_table(tree, table_format)

    return ReferenceArtifacts(javascript=javascript, doc_table=doc_table)


# ---- CLI harness ------------------------------------------------------------


def load_documentation(src_path: Path) -> DocTree:
    """
    Load and convert a documentation tree from a JSON file.

    Raises:
    - `OSError`: If the file cannot be read.
    - `json.JSONDecodeError`: If the file is not valid JSON.
    - `DocTreeError`: If the JSON does not have the documentation tree structure.
    """

    echo(f"Loading documentation '{src_path}'...")
    raw = json.loads(src_path.read_text(encoding="utf-8-sig"))
    tree = load_doc_tree(raw)
    echo(f"Loaded {len(tree.modules)} modules")
    return tree


def write_artifacts(
    artifacts: ReferenceArtifacts,
    js_path: Optional[Path],
    table_path: Optional[Path],
    header_path: Optional[Path] = None,
) -> None:
    """
    Write the generated artifacts.

    Parameters:
    - `artifacts`: The generated texts.
    - `js_path`: Destination of the stub JavaScript; printed to stdout when `None`.
    - `table_path`: Destination of the description table; not written when `None`.
    - `header_path`: Optional file whose contents are prepended to the stub JavaScript (e.g. `IntellisenseHeader.js`).
    """

    javascript = artifacts.javascript
    if header_path is not None:
        javascript = header_path.read_text(encoding="utf-8") + javascript

    if js_path:
        js_path.write_text(javascript, encoding="utf-8")
        echo(f"Stub JavaScript written to {js_path}")
    else:
        print(javascript, end="")

    if table_path:
        table_path.write_text(artifacts.doc_table, encoding="utf-8")
        echo(f"Module description table written to {table_path}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and return an argparse.Namespace object.

    Parameters:
    - argv: Optional list of strings to parse as command-line arguments. If not provided, sys.argv[1:] is used.

    Returns:
    - An argparse.Namespace object containing the parsed arguments.
    """

    p = argparse.ArgumentParser(description="noderef: IntelliSense reference generator for Node.js API documentation")
    p.add_argument("source", help="Path to the documentation tree (all.json)")
    p.add_argument("--output", "-o", default="", help="Stub JavaScript output filename (default: stdout)")
    p.add_argument("--table", "-t", default="", help="Module description table output filename")
    p.add_argument("--table-format", "-f", choices=TABLE_FORMATS, default="csharp", help="Description table format")
    p.add_argument("--header", default="", help="File prepended to the stub JavaScript")
    p.add_argument("--check", "-c", action="store_true", help="Check the stub JavaScript for syntax errors before writing")
    p.add_argument("--verbose", "-v", action="store_true", help="Output progress information to stdout")

    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point: load the documentation, generate both artifacts, optionally check the stubs, and write them out.

    Returns:
    - 0 on success, 1 if the documentation cannot be loaded or the generated stubs fail the syntax check. Nothing is
      written on failure.
    """

    args = _parse_args(argv)

    set_verbosity(args.verbose)

    src_path = Path(args.source)
    js_path = Path(args.output) if args.output else None
    table_path = Path(args.table) if args.table else None
    header_path = Path(args.header) if args.header else None

    if not src_path.is_file():
        error(f"Error: file not found: {src_path}")
        return 1

    try:
        tree = load_documentation(src_path)
    except json.JSONDecodeError as exc:
        error(f"Error: {src_path} is not valid JSON: {exc}")
        return 1
    except DocTreeError as exc:
        error(f"Error: malformed documentation tree at {exc}")
        return 1

    artifacts = generate_artifacts(tree, args.table_format)

    if args.check:
        echo("Checking stub JavaScript...")
        issues = find_syntax_errors(artifacts.javascript)
        if issues:
            for issue in issues:
                error(f"Generated JavaScript: {issue}")
            return 1

    write_artifacts(artifacts, js_path, table_path, header_path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
