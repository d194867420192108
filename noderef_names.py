#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Identifier-safe forms of documented names.

Documented names are headings as much as identifiers: "tls_(ssl)", "Child Process", "Class: fs.ReadStream". These
helpers reduce them to names that can be used as JavaScript identifiers and as module-cache keys.
"""

from __future__ import annotations


IRREGULAR_MODULE_NAMES = {
    "tls_(ssl)": "tls",
    "Events": "events",
}


def normalize_module_name(raw: str) -> str:
    """
    Reduce a documented module (or parameter / type) name to its identifier-safe prefix.

    Two irregular names are remapped explicitly. Otherwise the name is cut at the first character that is neither
    alphanumeric nor an underscore, e.g. "child_process (deprecated)" becomes "child_process".

    Parameters:
    - `raw`: The documented name.

    Returns:
    - The normalized name, which is `raw` itself if it is already identifier-safe.
    """

    if raw in IRREGULAR_MODULE_NAMES:
        return IRREGULAR_MODULE_NAMES[raw]

    for i, ch in enumerate(raw):
        if not (ch.isalnum() or ch == "_"):
            return raw[:i]
    return raw


def normalize_member_name(raw: str) -> str:
    """
    Reduce a documented method or property name to its identifier-safe prefix, e.g. "max-listeners" -> "max".

    Unlike module names there are no irregular remaps; `$` is kept since it is valid in a JavaScript identifier. A name
    starting with a digit has no identifier prefix and yields "".
    """

    if raw[:1].isdigit():
        return ""
    for i, ch in enumerate(raw):
        if not (ch.isalnum() or ch in "_$"):
            return raw[:i]
    return raw


def normalize_class_name(raw: str) -> str:
    """
    Strip spaces from a documented class name and drop any leading namespace, e.g. "fs.Read Stream" -> "ReadStream".
    """

    name = raw.replace(" ", "")
    dot = name.find(".")
    if dot != -1:
        return name[dot + 1:]
    return name


def global_function_name(raw: str) -> str:
    # Constructor-function name for a global object, e.g. "process" -> "__process"
    return "__" + raw
