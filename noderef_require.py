#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Emission of the `require` loader that ties the module stubs together.

The generated loader is a self-invoking function assigned to `require`. It keeps a cache with one entry per documented
module, initially `null`, and builds a module's stub tree only when that module is first required. Each call counts
towards a yield threshold: every `YIELD_THRESHOLD` calls the host's progress callback is invoked so an IDE performing
incremental analysis can interleave other work. Names missing from the cache fall through to an extension point (a
placeholder comment the host replaces with its own module resolution), wrapped in depth bookkeeping that always
restores `__filename`, `__dirname` and the depth cap on the way out.
"""

from __future__ import annotations

from noderef_log import echo
from noderef_model import ModuleDoc
from noderef_names import normalize_module_name
from noderef_stubs import SourceWriter, StubEmitter
from typing import Sequence, Tuple


YIELD_THRESHOLD = 50
MAX_REQUIRE_DEPTH = 5
PROGRESS_CALLBACK = "intellisense.progress"
USER_MODULE_SWITCH_MARKER = "// **NTVS** INSERT USER MODULE SWITCH HERE **NTVS**"

# (saved copy, ambient variable) pairs restored when the loader leaves user-module resolution
AMBIENT_STATE: Tuple[Tuple[str, str], ...] = (
    ("__prevFilename", "__filename"),
    ("__prevDirname", "__dirname"),
    ("__prevMaxRequireDepth", "max_require_depth"),
)


class ScopedBlock:
    """
    Context manager emitting an acquire / `try { ... } finally { release }` sequence.

    The acquire statements are written on entry, followed by `try {`; statements written inside the `with` block form the
    `try` body (at the nesting level returned by `__enter__`); the `finally` clause holding the release statements is
    written on exit. The generated release therefore runs on every exit path of the generated code.
    """

    def __init__(self, writer: SourceWriter, indent: int, acquire: Sequence[str], release: Sequence[str]) -> None:
        self.out = writer
        self.indent = indent
        self.acquire = acquire
        self.release = release

    def __enter__(self) -> int:
        for stmt in self.acquire:
            self.out.line(self.indent, stmt)
        self.out.line(self.indent, "try {")
        return self.indent + 1

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.out.line(self.indent, "} finally {")
            for stmt in self.release:
                self.out.line(self.indent + 1, stmt)
            self.out.line(self.indent, "}")
        return False


class AmbientStateGuard(ScopedBlock):
    """
    Saves the loader's ambient state (current file, current directory, depth cap) and restores it on exit.
    """

    def __init__(self, writer: SourceWriter, indent: int) -> None:
        super().__init__(
            writer,
            indent,
            acquire=[f"var {saved} = {name};" for saved, name in AMBIENT_STATE],
            release=[f"{name} = {saved};" for saved, name in AMBIENT_STATE],
        )


class DepthGuard(ScopedBlock):
    """
    Increments the require depth on entry and decrements it on exit.
    """

    def __init__(self, writer: SourceWriter, indent: int) -> None:
        super().__init__(writer, indent, acquire=["require_depth++;"], release=["require_depth--;"])


class RequireShimEmitter:
    """
    Emits the `require` loader for a sequence of modules, building each module's stub with a `StubEmitter`.
    """

    def __init__(self, writer: SourceWriter, stubs: StubEmitter) -> None:
        self.out = writer
        self.stubs = stubs

    def emit(self, modules: Sequence[ModuleDoc]) -> None:
        """
        Emit the complete loader.

        Parameters:
        - `modules`: The documented modules, in documentation order. Duplicate normalized names are emitted as they
          occur.
        """

        out = self.out
        out.line(0, "require = function () {")
        out.line(1, "var require_count = 0;")
        out.line(1, "var require_depth = 0;")
        out.line(1, f"var max_require_depth = {MAX_REQUIRE_DEPTH};")

        out.line(1, "var cache = {")
        for module in modules:
            out.line(2, f'"{normalize_module_name(module.name)}": null,')
        out.line(1, "};")

        self._emit_make_module(modules)
        self._emit_loader()

        out.line(1, "return f;")
        out.line(0, "}();")

    def _emit_make_module(self, modules: Sequence[ModuleDoc]) -> None:
        out = self.out
        out.line(1, "function make_module(module_name) {")
        out.line(2, "switch(module_name) {")
        for module in modules:
            name = normalize_module_name(module.name)
            echo(f"Generating module '{name}'...")
            self.stubs.emit_module(module, 3, name=name, lead=f'case "{name}": return new ', trail=";")
        out.line(2, "}")
        out.line(1, "}")

    def _emit_loader(self) -> None:
        out = self.out
        out.line(1, "var f = function(module) {")
        out.line(2, "module = module.replace(/\\\\/g, '/');")
        out.line(2, f"if(require_count++ >= {YIELD_THRESHOLD}) {{")
        out.line(3, "require_count = 0;")
        out.line(3, f"{PROGRESS_CALLBACK}();")
        out.line(2, "}")
        out.line(2, "var result = cache[module];")
        out.line(2, "if(typeof result !== 'undefined') {")
        out.line(3, "if(result === null) {")
        out.line(4, "// modules are built on first use")
        out.line(4, "cache[module] = result = make_module(module);")
        out.line(3, "}")
        out.line(3, "return result;")
        out.line(2, "}")
        out.line(2, "// not a documented module, resolve it as a user module")
        with AmbientStateGuard(out, 2) as inner:
            out.line(inner, "if(require_depth >= max_require_depth) {")
            out.line(inner + 1, "return undefined;")
            out.line(inner, "}")
            with DepthGuard(out, inner) as body:
                out.line(body, USER_MODULE_SWITCH_MARKER)
        out.line(1, "};")
