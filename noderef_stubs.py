#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Generation of JavaScript stubs from the documentation model.

Every documented module becomes a constructor-style function whose body assigns inert stand-ins for the module's API to
`this`:

    function fs() {
        /// <summary>File I/O is provided by simple wrappers around standard POSIX functions.</summary>
        this.rename = function(oldPath, newPath, callback) {
            /// <signature>
            /// <param name="oldPath" type="String"></param>
            ...
            /// </signature>
        }
        ...
    }

# Highlights of Internal Workings

1. **Fixed member order**: methods, then events, then classes, then properties. Tools that consume the stubs rely on the
   textual position of members, so the order never changes.
2. **Documentation comments**: descriptions are carried in `///` XML documentation comments (`<summary>`, `<signature>`,
   `<param>`, `<returns>`, `<field>`), one line each.
3. **Classes**: a class `X` becomes a private constructor `_X` plus a factory method `this.X` returning `new _X()`;
   classes are never exposed as constructors.
4. **Bodies**: empty, except for a few hand-written `path` methods and the `createX` factory convention, which returns
   `new this.X()`.
5. **Property values**: inferred from the documented type by `noderef_values.infer_default`.
"""

from __future__ import annotations

from noderef_log import echo, warn
from noderef_model import ClassDoc, EventDoc, MethodDoc, ModuleDoc, PropertyDoc, SignatureDoc
from noderef_names import global_function_name, normalize_class_name, normalize_member_name, normalize_module_name
from noderef_refcode import reference_body
from noderef_richtext import to_doc_comment, to_plain_summary
from noderef_values import Specializer, infer_default, specializer_for
from typing import List, Optional, Sequence, Tuple


INDENT_WIDTH = 4
FACTORY_PREFIX = "create"


# ---- Output buffer ----------------------------------------------------------


class SourceWriter:
    """
    Accumulating line buffer for one generated artifact.

    Indentation is expressed in nesting levels; each level is `indent_width` spaces.
    """

    def __init__(self, indent_width: int = INDENT_WIDTH) -> None:
        self._lines: List[str] = []
        self._indent_width = indent_width

    def line(self, indent: int, text: str = "") -> None:
        """
        Append one line at the given nesting level. Empty text produces an empty line without trailing spaces.
        """

        self._lines.append(" " * (indent * self._indent_width) + text if text else "")

    def lines(self, indent: int, block: str) -> None:
        """
        Append a multi-line block, re-indented so that its first column sits at the given nesting level.
        """

        for ln in block.split("\n"):
            self.line(indent, ln)

    def text(self) -> str:
        return "\n".join(self._lines) + "\n" if self._lines else ""


# ---- Helpers ----------------------------------------------------------------


def is_factory_name(method_name: str) -> bool:
    """
    Return `True` for names following the `createX` factory convention, e.g. "createServer" (but not "create").
    """

    return method_name.startswith(FACTORY_PREFIX) and len(method_name) > len(FACTORY_PREFIX)


def parameter_list(signature: SignatureDoc) -> List[str]:
    """
    Return the declared parameter names for a signature.

    Emission stops at the variadic marker "...". Names are reduced to identifiers; optional-parameter brackets such as
    "[callback]" are removed first, and names with nothing left are dropped.
    """

    names: List[str] = []
    for param in signature.params:
        if param.is_variadic:
            break
        name = normalize_module_name(param.name.strip("[] "))
        if name:
            names.append(name)
    return names


def _event_listing(events: Sequence[EventDoc]) -> List[EventDoc]:
    # Names containing a space describe several events in prose ("Event: 'end' or 'close'"); leave them out
    return [ev for ev in events if " " not in ev.name]


# ---- Emitter ----------------------------------------------------------------


class StubEmitter:
    """
    Recursive documentation-to-JavaScript emitter writing into a `SourceWriter`.

    The only state threaded through the recursion is the nesting level; everything else is read from the immutable
    documentation model.
    """

    def __init__(self, writer: SourceWriter) -> None:
        self.out = writer

    def emit_globals(self, globals_: Sequence[ModuleDoc]) -> None:
        """
        Declare a global `var` for every global object that documents methods, events, properties or classes.

        Each global becomes `var name = new function __name() { ... };` at the top level.
        """

        for glob in globals_:
            if not glob.is_global_candidate:
                continue
            var_name = normalize_module_name(glob.name)
            if not var_name:
                warn(f"Skipping global object '{glob.name}': no identifier can be derived from its name")
                continue
            echo(f"Generating global '{var_name}'...")
            self.emit_module(
                glob,
                0,
                name=global_function_name(var_name),
                lead=f"var {var_name} = new ",
                trail=";",
            )

    def emit_module(
        self,
        module: ModuleDoc,
        indent: int,
        name: Optional[str] = None,
        lead: str = "",
        trail: str = "",
    ) -> None:
        """
        Emit the constructor-style function for a module.

        Parameters:
        - `module`: The module (or global object) to emit.
        - `indent`: Nesting level of the `function` line.
        - `name`: The function name; defaults to the normalized module name. It also selects the hand-written method
          bodies and the property specializer.
        - `lead`: Text placed before `function` on the opening line, e.g. `case "fs": return new `.
        - `trail`: Text placed after the closing brace, e.g. ";".
        """

        if name is None:
            name = normalize_module_name(module.name)

        self.out.line(indent, f"{lead}function {name}() {{")
        self._emit_summary(module.desc, indent + 1)

        declared = tuple(normalize_class_name(klass.name) for klass in module.classes or ())
        for method in module.methods or ():
            self.emit_method(method, indent + 1, body=reference_body(name, method.name), known_classes=declared)

        if module.events is not None:
            self.emit_events(module.events, indent + 1)

        for klass in module.classes or ():
            self.emit_class(klass, indent + 1, known_classes=declared)

        if module.properties is not None:
            self.emit_properties(module.properties, indent + 1, specializer_for(name))

        self.out.line(indent, "}" + trail)

    def emit_class(self, klass: ClassDoc, indent: int, known_classes: Tuple[str, ...] = ()) -> None:
        """
        Emit a class as a private constructor `_Name` followed by the factory method `this.Name`.

        `known_classes` are the normalized names of the classes declared in the enclosing module, which `createX`
        methods of the class may construct.
        """

        class_name = normalize_class_name(klass.name)

        self.out.line(indent, f"function _{class_name}() {{")
        self._emit_summary(klass.desc, indent + 1)
        for method in klass.methods or ():
            self.emit_method(method, indent + 1, known_classes=known_classes)
        if klass.events is not None:
            self.emit_events(klass.events, indent + 1)
        if klass.properties is not None:
            self.emit_properties(klass.properties, indent + 1, None)
        self.out.line(indent, "}")

        self.out.line(indent, f"this.{class_name} = function() {{")
        self.out.line(indent + 1, f"return new _{class_name}();")
        self.out.line(indent, "}")

    def emit_method(
        self,
        method: MethodDoc,
        indent: int,
        body: Optional[str] = None,
        known_classes: Tuple[str, ...] = (),
    ) -> None:
        """
        Emit a method stub with one `<signature>` documentation block per documented signature.

        The declared parameters come from the first signature only; the other signatures are documentation. Signatures
        without parameters are not documented.

        Parameters:
        - `method`: The method to emit.
        - `indent`: Nesting level of the `this.name = function(...)` line.
        - `body`: Hand-written body, used verbatim (re-indented) when given.
        - `known_classes`: Normalized names of the classes declared next to the method, used to check the target of a
          `createX` factory.
        """

        method_name = normalize_member_name(method.name)
        if not method_name:
            warn(f"Skipping method '{method.name}': no identifier can be derived from its name")
            return

        params = ", ".join(parameter_list(method.signatures[0]))
        self.out.line(indent, f"this.{method_name} = function({params}) {{")
        self._emit_summary(method.desc, indent + 1)

        for signature in method.signatures:
            if signature.params:
                self._emit_signature(signature, indent + 1)

        if body is not None:
            self.out.lines(indent + 1, body)
        elif is_factory_name(method_name):
            target = method_name[len(FACTORY_PREFIX):]
            if target not in known_classes:
                warn(f"Factory method '{method_name}' returns undeclared class '{target}'")
            self.out.line(indent + 1, f"return new this.{target}();")

        self.out.line(indent, "}")

    def _emit_signature(self, signature: SignatureDoc, indent: int) -> None:
        self.out.line(indent, "/// <signature>")

        for param in signature.params:
            attrs = f'name="{param.name}"'
            if param.type is not None:
                attrs += f' type="{normalize_module_name(param.type)}"'
            desc = to_doc_comment(param.desc) if param.desc is not None else ""
            self.out.line(indent, f"/// <param {attrs}>{desc}</param>")

        returns = signature.returns
        if returns is not None and (returns.type is not None or returns.desc is not None):
            attrs = f' type="{normalize_module_name(returns.type)}"' if returns.type is not None else ""
            desc = to_doc_comment(returns.desc) if returns.desc is not None else ""
            self.out.line(indent, f"/// <returns{attrs}>{desc}</returns>")

        self.out.line(indent, "/// </signature>")

    def emit_properties(self, properties: Sequence[PropertyDoc], indent: int, specializer: Optional[Specializer]) -> None:
        """
        Emit `this.name = value;` for each property, preceded by a `<field>` comment when the property is described.

        Names are reduced to identifiers; a property with no identifier prefix is skipped with a warning.
        """

        for prop in properties:
            prop_name = normalize_member_name(prop.name)
            if not prop_name:
                warn(f"Skipping property '{prop.name}': no identifier can be derived from its name")
                continue
            if prop.desc is not None:
                self.out.line(indent, f"/// <field name='{prop_name}'>{to_doc_comment(prop.desc)}</field>")
            value = infer_default(prop.desc, prop.text_raw, prop_name, specializer)
            self.out.line(indent, f"this.{prop_name} = {value};")

    def emit_events(self, events: Sequence[EventDoc], indent: int) -> None:
        """
        Emit the EventEmitter surface (`addListener`, `once`, `removeListener`, `removeAllListeners`, `listeners`,
        `setMaxListeners`, `emit`, `on`), documented with the events this object supports.

        Subscription and emission carry the full per-event block; removal and introspection carry a one-line list of the
        event names.
        """

        listed = _event_listing(events)

        full_doc = [
            "/// <summary>",
            "/// Supported events: &#10;",
        ]
        for ev in listed:
            entry = f"/// {ev.name}"
            if ev.desc is not None:
                entry += f": {to_plain_summary(ev.desc)}"
            full_doc.append(entry + "&#10;")
        full_doc.append("/// </summary>")

        names = ", ".join(ev.name for ev in listed)
        short_doc = [f"/// <summary>Supported Events: {names}</summary>"]

        self._emit_listener_method("addListener", "event, listener", full_doc, indent)
        self._emit_listener_method("once", "event, listener", full_doc, indent)
        self._emit_listener_method("removeListener", "event, listener", short_doc, indent)
        self._emit_listener_method("removeAllListeners", "event", short_doc, indent)
        self._emit_listener_method("listeners", "event", short_doc, indent)
        self.out.line(indent, "this.setMaxListeners = function(n) { }")
        self._emit_listener_method("emit", "event, arguments", full_doc, indent)
        self._emit_listener_method("on", "event, listener", full_doc, indent)

    def _emit_listener_method(self, name: str, params: str, doc: Sequence[str], indent: int) -> None:
        self.out.line(indent, f"this.{name} = function({params}) {{")
        for ln in doc:
            self.out.line(indent + 1, ln)
        self.out.line(indent, "}")

    def _emit_summary(self, desc: Optional[str], indent: int) -> None:
        if desc is not None:
            self.out.line(indent, f"/// <summary>{to_doc_comment(desc)}</summary>")
