#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Hand-written JavaScript bodies for the few stub methods that need real behaviour.

Static analysis follows `require(path.join(__dirname, 'lib'))` only if `path.join` actually computes a path, so the
`path` module's `normalize`, `join`, `resolve` and `relative` get working (posix style) implementations. Every other
stub method is empty.

Bodies are stored unindented; the stub emitter indents them to the method's nesting level. They only use `arguments`,
so they do not depend on the parameter names found in the documentation.
"""

from __future__ import annotations

from typing import Dict, Optional
import textwrap


PATH_MODULE = "path"


PATH_NORMALIZE_BODY = textwrap.dedent("""\
    var p = String(arguments[0]);
    var isAbsolute = p.charAt(0) === '/';
    var trailingSlash = p.length > 0 && p.charAt(p.length - 1) === '/';
    var parts = p.split('/');
    var out = [];
    for (var i = 0; i < parts.length; i++) {
        var part = parts[i];
        if (!part || part === '.') {
            continue;
        }
        if (part === '..') {
            if (out.length && out[out.length - 1] !== '..') {
                out.pop();
            } else if (!isAbsolute) {
                out.push('..');
            }
        } else {
            out.push(part);
        }
    }
    p = out.join('/');
    if (!p && !isAbsolute) {
        p = '.';
    }
    if (p && trailingSlash) {
        p += '/';
    }
    return (isAbsolute ? '/' : '') + p;""")


PATH_JOIN_BODY = textwrap.dedent("""\
    var parts = [];
    for (var i = 0; i < arguments.length; i++) {
        if (arguments[i]) {
            parts.push(String(arguments[i]));
        }
    }
    return this.normalize(parts.join('/'));""")


PATH_RESOLVE_BODY = textwrap.dedent("""\
    var resolved = '';
    for (var i = arguments.length - 1; i >= 0 && resolved.charAt(0) !== '/'; i--) {
        if (arguments[i]) {
            resolved = String(arguments[i]) + (resolved ? '/' + resolved : '');
        }
    }
    if (resolved.charAt(0) !== '/') {
        var cwd = typeof __dirname === 'string' ? __dirname : '/';
        resolved = cwd + (resolved ? '/' + resolved : '');
    }
    resolved = this.normalize(resolved);
    if (resolved.length > 1 && resolved.charAt(resolved.length - 1) === '/') {
        resolved = resolved.slice(0, -1);
    }
    return resolved;""")


PATH_RELATIVE_BODY = textwrap.dedent("""\
    function split(p) {
        var parts = p.split('/');
        var out = [];
        for (var k = 0; k < parts.length; k++) {
            if (parts[k]) {
                out.push(parts[k]);
            }
        }
        return out;
    }
    var fromParts = split(this.resolve(arguments[0]));
    var toParts = split(this.resolve(arguments[1]));
    var length = Math.min(fromParts.length, toParts.length);
    var same = length;
    for (var i = 0; i < length; i++) {
        if (fromParts[i] !== toParts[i]) {
            same = i;
            break;
        }
    }
    var out = [];
    for (var j = same; j < fromParts.length; j++) {
        out.push('..');
    }
    return out.concat(toParts.slice(same)).join('/');""")


PATH_BODIES: Dict[str, str] = {
    "relative": PATH_RELATIVE_BODY,
    "normalize": PATH_NORMALIZE_BODY,
    "resolve": PATH_RESOLVE_BODY,
    "join": PATH_JOIN_BODY,
}


def reference_body(container: str, method: str) -> Optional[str]:
    """
    Return the hand-written body for `container.method`, or `None` if the stub body should be generated.
    """

    if container == PATH_MODULE:
        return PATH_BODIES.get(method)
    return None
