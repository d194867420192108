#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

The module description lookup table used by the completion list.

When the editor offers `require('...')` completions it shows a description next to each module name. The table pairs
each normalized module name with its description flattened by `noderef_richtext.to_inline_comment`, in documentation
order. It is rendered either as the C# dictionary initializer the completion source is compiled with, or as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from noderef_model import DocTree
from noderef_names import normalize_module_name
from noderef_richtext import to_inline_comment
from typing import List, Sequence, Tuple
import json


DocTable = List[Tuple[str, str]]


@dataclass(frozen=True)
class TableLayout:
    """
    Names used by the C# rendering of the table.

    Attributes:
        namespace (str): Namespace enclosing the partial class.
        class_decl (str): The partial class declaration line, without the opening brace.
        field_name (str): Name of the static dictionary field.
    """

    namespace: str = "Microsoft.NodejsTools.Intellisense"
    class_decl: str = "sealed partial class CompletionSource : ICompletionSource"
    field_name: str = "_nodejsModules"
    usings: Tuple[str, ...] = (
        "System.Collections.Generic",
        "Microsoft.VisualStudio.Language.Intellisense",
    )


DEFAULT_LAYOUT = TableLayout()


def build_doc_table(tree: DocTree) -> DocTable:
    """
    Pair each module's normalized name with its flattened description.

    Modules without a description get an empty string. Order follows the documentation; no sorting or deduplication.
    """

    return [(normalize_module_name(module.name), to_inline_comment(module.desc or "")) for module in tree.modules]


def render_csharp_table(entries: Sequence[Tuple[str, str]], layout: TableLayout = DEFAULT_LAYOUT) -> str:
    """
    Render the table as a C# source file declaring a `Dictionary<string, string>` initializer.

    The descriptions are already escaped for a double-quoted literal, so they are inserted as-is.

    Parameters:
    - `entries`: The `(module name, escaped description)` pairs.
    - `layout`: Namespace, class and field names to use.

    Returns:
    - The C# source text.
    """

    lines = [f"using {using};" for using in layout.usings]
    lines += [
        "",
        f"namespace {layout.namespace} {{",
        f"    {layout.class_decl} {{",
        f"        private static Dictionary<string, string> {layout.field_name} = new Dictionary<string, string>() {{",
    ]
    for name, doc in entries:
        lines.append(f'            {{"{name}", "{doc}" }},')
    lines += [
        "        };",
        "    }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def render_json_table(entries: Sequence[Tuple[str, str]]) -> str:
    """
    Render the table as a JSON array of `[name, description]` pairs, in table order.

    The values are the same escaped strings the C# rendering uses. Pairs are kept as a list so entries sharing a
    name all survive, as they do in the C# rendering.
    """

    return json.dumps([[name, doc] for name, doc in entries], indent=2, ensure_ascii=False) + "\n"
