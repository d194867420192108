#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Inference of plausible default values for documented properties.

A stub property needs a value whose type matches the documentation, so that static analysis of `fs.foo.bar` sees a
boolean, a number or a stream rather than `undefined`. The value is derived from the documented type text alone; a small
registry of per-container specializers supplies fixed values for properties whose type text says nothing useful (such as
the fields of the `process` global).
"""

from __future__ import annotations

from typing import Callable, Dict, Optional
import re


Specializer = Callable[[str], Optional[str]]

READABLE_STREAM = "require('stream').Readable()"
WRITABLE_STREAM = "require('stream').Writable()"
UNDEFINED = "undefined"

# Signature text of the one writable stream whose description does not say so
STDERR_TEXT_RAW = "process.stderr"

_DESC_TYPE_MARKERS = (
    ("<code>Boolean</code>", "true"),
    ("<code>Number</code>", "0"),
    ("<code>Readable Stream</code>", READABLE_STREAM),
    ("<code>Writable Stream</code>", WRITABLE_STREAM),
)

_TEXT_RAW_TYPES = {
    "Boolean": "true",
    "Number": "0",
}

_TYPE_TOKEN_RE = re.compile(r"\{([^{}]*)\}")


def infer_default(desc: Optional[str], text_raw: Optional[str], name: str = "", specializer: Optional[Specializer] = None) -> str:
    """
    Infer a JavaScript literal to assign to a stub property.

    The checks are applied in order, first match wins:

    1. Type markers in the HTML description: `<code>Boolean</code>` -> `true`, `<code>Number</code>` -> `0`,
       `<code>Readable Stream</code>` / `<code>Writable Stream</code>` -> a stream constructor call. A raw signature of
       exactly "process.stderr" is also a writable stream.
    2. A `{Type}` token in the raw signature text: `{Boolean}` -> `true`, `{Number}` -> `0`.
    3. The container's specializer, if any, applied to the property name.
    4. `undefined`.

    Parameters:
    - `desc`: The property's HTML description, or `None`.
    - `text_raw`: The property's raw signature text, e.g. "`stdout` {Stream}", or `None`.
    - `name`: The property name, passed to the specializer.
    - `specializer`: The container's specializer, or `None`.

    Returns:
    - The literal as JavaScript source text.
    """

    desc = desc or ""
    text_raw = text_raw or ""

    for marker, value in _DESC_TYPE_MARKERS:
        if marker in desc:
            return value
    if text_raw == STDERR_TEXT_RAW:
        return WRITABLE_STREAM

    if text_raw.strip():
        match = _TYPE_TOKEN_RE.search(text_raw)
        if match and match.group(1).strip() in _TEXT_RAW_TYPES:
            return _TEXT_RAW_TYPES[match.group(1).strip()]

    if specializer is not None:
        value = specializer(name)
        if value is not None:
            return value

    return UNDEFINED


# ---- Specializers -----------------------------------------------------------


_PROCESS_DEFAULTS = {
    "env": "{}",
    "versions": "{node: '0.10.0', v8: '3.14.5.8'}",
    "pid": "0",
    "title": "''",
    "platform": "'win32'",
    "maxTickDepth": "1000",
    "argv": "[ 'node.exe' ]",
}


def process_specializer(name: str) -> Optional[str]:
    # Emulates the runtime descriptor of a default Windows node process
    return _PROCESS_DEFAULTS.get(name)


PROPERTY_SPECIALIZERS: Dict[str, Specializer] = {
    "__process": process_specializer,
}


def register_specializer(container: str, specializer: Specializer) -> None:
    """
    Register `specializer` for the properties of the stub function named `container` (e.g. "__process").
    """

    PROPERTY_SPECIALIZERS[container] = specializer


def specializer_for(container: str) -> Optional[Specializer]:
    return PROPERTY_SPECIALIZERS.get(container)
