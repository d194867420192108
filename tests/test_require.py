"""Tests for the require loader emitter."""

import pytest

from noderef_model import ModuleDoc
from noderef_require import (
    MAX_REQUIRE_DEPTH,
    USER_MODULE_SWITCH_MARKER,
    YIELD_THRESHOLD,
    AmbientStateGuard,
    RequireShimEmitter,
    ScopedBlock,
)
from noderef_stubs import SourceWriter, StubEmitter


EXPECTED_OS_LOADER = r"""require = function () {
    var require_count = 0;
    var require_depth = 0;
    var max_require_depth = 5;
    var cache = {
        "os": null,
    };
    function make_module(module_name) {
        switch(module_name) {
            case "os": return new function os() {
            };
        }
    }
    var f = function(module) {
        module = module.replace(/\\/g, '/');
        if(require_count++ >= 50) {
            require_count = 0;
            intellisense.progress();
        }
        var result = cache[module];
        if(typeof result !== 'undefined') {
            if(result === null) {
                // modules are built on first use
                cache[module] = result = make_module(module);
            }
            return result;
        }
        // not a documented module, resolve it as a user module
        var __prevFilename = __filename;
        var __prevDirname = __dirname;
        var __prevMaxRequireDepth = max_require_depth;
        try {
            if(require_depth >= max_require_depth) {
                return undefined;
            }
            require_depth++;
            try {
                // **NTVS** INSERT USER MODULE SWITCH HERE **NTVS**
            } finally {
                require_depth--;
            }
        } finally {
            __filename = __prevFilename;
            __dirname = __prevDirname;
            max_require_depth = __prevMaxRequireDepth;
        }
    };
    return f;
}();
"""


def emit_loader(modules):
    out = SourceWriter()
    RequireShimEmitter(out, StubEmitter(out)).emit(modules)
    return out.text()


class TestRequireShim:
    """Test the generated loader."""

    def test_complete_loader_for_one_module(self):
        """Test the full loader text for a single, empty module."""
        assert emit_loader([ModuleDoc(name="os")]) == EXPECTED_OS_LOADER

    def test_constants_in_output(self):
        """Test the yield threshold and depth cap values."""
        assert YIELD_THRESHOLD == 50
        assert MAX_REQUIRE_DEPTH == 5
        assert USER_MODULE_SWITCH_MARKER in EXPECTED_OS_LOADER

    def test_cache_lists_every_normalized_name(self, sample_tree):
        """Test one null cache entry per module, in order, with normalized names."""
        lines = emit_loader(sample_tree.modules).splitlines()

        start = lines.index("    var cache = {")
        assert lines[start + 1:start + 5] == [
            '        "path": null,',
            '        "http": null,',
            '        "tls": null,',
            "    };",
        ]

    def test_one_case_per_module(self, sample_tree):
        """Test make_module dispatches to each module's stub."""
        text = emit_loader(sample_tree.modules)

        assert '            case "path": return new function path() {' in text
        assert '            case "http": return new function http() {' in text
        assert '            case "tls": return new function tls() {' in text
        assert text.count("case ") == 3

    def test_module_members_nested_under_case(self, sample_tree):
        """Test module members are indented one level below their case."""
        text = emit_loader(sample_tree.modules)

        assert "                this.createServer = function(requestListener) {" in text
        assert "                    return new this.Server();" in text

    def test_duplicate_names_not_deduplicated(self):
        """Test modules are emitted as documented, even when names collide."""
        text = emit_loader([ModuleDoc(name="Events"), ModuleDoc(name="events")])

        assert text.count('"events": null,') == 2
        assert text.count('case "events"') == 2


class TestScopedBlocks:
    """Test the try/finally emission guards."""

    def test_guard_wraps_body(self):
        """Test acquire, try body and finally release are written in order."""
        out = SourceWriter()
        with ScopedBlock(out, 0, ["lock();"], ["unlock();"]) as inner:
            out.line(inner, "work();")

        assert out.text() == "lock();\ntry {\n    work();\n} finally {\n    unlock();\n}\n"

    def test_ambient_state_guard_restores_all_three(self):
        """Test the saved file, directory and depth cap are all restored."""
        out = SourceWriter()
        with AmbientStateGuard(out, 1):
            pass
        text = out.text()

        assert "        __filename = __prevFilename;" in text
        assert "        __dirname = __prevDirname;" in text
        assert "        max_require_depth = __prevMaxRequireDepth;" in text

    def test_guard_propagates_emitter_errors(self):
        """Test a failure while emitting the body is not swallowed."""
        out = SourceWriter()
        with pytest.raises(RuntimeError):
            with ScopedBlock(out, 0, [], ["release();"]):
                raise RuntimeError("emitter failed")

        assert "finally" not in out.text()
