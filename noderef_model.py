#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Typed model of a Node.js-style API documentation tree (the `all.json` produced by the documentation tooling).

The raw JSON is walked exactly once by `load_doc_tree`, which turns every module, class, method, signature, parameter,
property and event into a frozen dataclass. Everything downstream works on these objects rather than on dictionaries,
so a missing key is either modelled as `None` (optional facets) or rejected up front with a `DocTreeError` that names
the offending node.

Optional facets (`methods`, `events`, `properties`, `classes`) keep the difference between "absent" (`None`) and
"present but empty" (`()`): a global object is only declared when at least one facet is present, and an empty `events`
list still produces the event-subscription stubs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple, TypeVar


GLOBAL_OBJECTS_SECTION = "Global Objects"
VARIADIC_PARAM = "..."

T = TypeVar("T")


class DocTreeError(ValueError):
    """
    Raised when the documentation tree violates the structure the generator relies upon.

    Attributes:
        path (str): Location of the offending node, e.g. "modules[3].methods[0]".
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


# ---- Node types -------------------------------------------------------------


@dataclass(frozen=True)
class ParamDoc:
    name: str
    type: Optional[str] = None
    desc: Optional[str] = None

    @property
    def is_variadic(self) -> bool:
        return self.name == VARIADIC_PARAM


@dataclass(frozen=True)
class ReturnDoc:
    type: Optional[str] = None
    desc: Optional[str] = None


@dataclass(frozen=True)
class SignatureDoc:
    params: Tuple[ParamDoc, ...] = ()
    returns: Optional[ReturnDoc] = None


@dataclass(frozen=True)
class MethodDoc:
    name: str
    signatures: Tuple[SignatureDoc, ...]
    desc: Optional[str] = None


@dataclass(frozen=True)
class PropertyDoc:
    name: str
    desc: Optional[str] = None
    text_raw: Optional[str] = None


@dataclass(frozen=True)
class EventDoc:
    name: str
    desc: Optional[str] = None


@dataclass(frozen=True)
class ClassDoc:
    name: str
    desc: Optional[str] = None
    methods: Optional[Tuple[MethodDoc, ...]] = None
    events: Optional[Tuple[EventDoc, ...]] = None
    properties: Optional[Tuple[PropertyDoc, ...]] = None


@dataclass(frozen=True)
class ModuleDoc:
    """
    A documented module, or a global object (which shares the module shape).

    Attributes:
        name (str): The documented name, e.g. "fs", "tls_(ssl)", "process".
        desc (Optional[str]): HTML fragment describing the module.
        methods, events, properties, classes: The optional facets; `None` when the key was absent.
    """

    name: str
    desc: Optional[str] = None
    methods: Optional[Tuple[MethodDoc, ...]] = None
    events: Optional[Tuple[EventDoc, ...]] = None
    properties: Optional[Tuple[PropertyDoc, ...]] = None
    classes: Optional[Tuple[ClassDoc, ...]] = None

    @property
    def is_global_candidate(self) -> bool:
        """
        Return `True` if this entry carries anything worth declaring as a global `var`.
        """

        return any(facet is not None for facet in (self.events, self.methods, self.properties, self.classes))


@dataclass(frozen=True)
class DocTree:
    modules: Tuple[ModuleDoc, ...] = ()
    globals: Tuple[ModuleDoc, ...] = ()


# ---- Conversion from parsed JSON --------------------------------------------


def _expect_mapping(node: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(node, Mapping):
        raise DocTreeError(path, f"expected an object, got {type(node).__name__}")
    return node


def _required_str(node: Mapping[str, Any], key: str, path: str) -> str:
    value = node.get(key)
    if value is None:
        raise DocTreeError(path, f"missing required key '{key}'")
    if not isinstance(value, str):
        raise DocTreeError(path, f"key '{key}' must be a string")
    return value


def _optional_str(node: Mapping[str, Any], key: str) -> Optional[str]:
    value = node.get(key)
    return None if value is None else str(value)


def _sequence(
    node: Mapping[str, Any],
    key: str,
    path: str,
    convert: Callable[[Any, str], T],
) -> Optional[Tuple[T, ...]]:
    """
    Convert the list stored under `key`, or return `None` if the key is absent.

    Parameters:
    - `node`: The parent JSON object.
    - `key`: The list-valued key to convert.
    - `path`: Location of `node`, used to build child paths for error reporting.
    - `convert`: Called as `convert(item, item_path)` for each list item.

    Returns:
    - A tuple of converted items, or `None` if `node` has no such key.
    """

    if key not in node or node[key] is None:
        return None
    items = node[key]
    if not isinstance(items, list):
        raise DocTreeError(f"{path}.{key}", "expected a list")
    return tuple(convert(item, f"{path}.{key}[{i}]") for i, item in enumerate(items))


def _load_param(node: Any, path: str) -> ParamDoc:
    node = _expect_mapping(node, path)
    return ParamDoc(
        name=_required_str(node, "name", path),
        type=_optional_str(node, "type"),
        desc=_optional_str(node, "desc"),
    )


def _load_signature(node: Any, path: str) -> SignatureDoc:
    node = _expect_mapping(node, path)
    params = _sequence(node, "params", path, _load_param) or ()
    returns = None
    ret = node.get("return")
    if ret is not None:
        ret = _expect_mapping(ret, f"{path}.return")
        returns = ReturnDoc(type=_optional_str(ret, "type"), desc=_optional_str(ret, "desc"))
    return SignatureDoc(params=params, returns=returns)


def _load_method(node: Any, path: str) -> MethodDoc:
    node = _expect_mapping(node, path)
    name = _required_str(node, "name", path)
    signatures = _sequence(node, "signatures", path, _load_signature)
    if not signatures:
        raise DocTreeError(path, f"method '{name}' has no signatures")
    return MethodDoc(name=name, signatures=signatures, desc=_optional_str(node, "desc"))


def _load_property(node: Any, path: str) -> PropertyDoc:
    node = _expect_mapping(node, path)
    return PropertyDoc(
        name=_required_str(node, "name", path),
        desc=_optional_str(node, "desc"),
        text_raw=_optional_str(node, "textRaw"),
    )


def _load_event(node: Any, path: str) -> EventDoc:
    node = _expect_mapping(node, path)
    return EventDoc(name=_required_str(node, "name", path), desc=_optional_str(node, "desc"))


def _load_class(node: Any, path: str) -> ClassDoc:
    node = _expect_mapping(node, path)
    return ClassDoc(
        name=_required_str(node, "name", path),
        desc=_optional_str(node, "desc"),
        methods=_sequence(node, "methods", path, _load_method),
        events=_sequence(node, "events", path, _load_event),
        properties=_sequence(node, "properties", path, _load_property),
    )


def _load_module(node: Any, path: str) -> ModuleDoc:
    node = _expect_mapping(node, path)
    return ModuleDoc(
        name=_required_str(node, "name", path),
        desc=_optional_str(node, "desc"),
        methods=_sequence(node, "methods", path, _load_method),
        events=_sequence(node, "events", path, _load_event),
        properties=_sequence(node, "properties", path, _load_property),
        classes=_sequence(node, "classes", path, _load_class),
    )


def load_doc_tree(raw: Any) -> DocTree:
    """
    Convert a parsed `all.json` documentation tree into a `DocTree`.

    Modules are read from the top-level "modules" list. Global objects are read from the "globals" list of the "miscs"
    section named "Global Objects"; only the first such section is used.

    Parameters:
    - `raw`: The parsed JSON document (as returned by `json.load`).

    Returns:
    - The immutable `DocTree`.

    Raises:
    - `DocTreeError`: If a node is not an object, or a required key (a name, or a method's signatures) is missing.
    """

    raw = _expect_mapping(raw, "$")
    modules = _sequence(raw, "modules", "$", _load_module) or ()

    globals_: Tuple[ModuleDoc, ...] = ()
    for i, misc in enumerate(raw.get("miscs") or ()):
        misc = _expect_mapping(misc, f"$.miscs[{i}]")
        if misc.get("name") == GLOBAL_OBJECTS_SECTION:
            globals_ = _sequence(misc, "globals", f"$.miscs[{i}]", _load_module) or ()
            break

    return DocTree(modules=modules, globals=globals_)
