"""Shared fixtures: a small documentation tree in the shape of Node's all.json."""

import copy

import pytest

from noderef_model import load_doc_tree


SAMPLE_DOC = {
    "modules": [
        {
            "name": "path",
            "desc": "<p>Utilities for handling file paths.</p>\n<p>Use <code>require('path')</code>.</p>\n",
            "methods": [
                {"name": "normalize", "signatures": [{"params": [{"name": "p"}]}]},
                {"name": "join", "signatures": [{"params": [{"name": "path1"}, {"name": "path2"}, {"name": "..."}]}]},
                {"name": "resolve", "signatures": [{"params": [{"name": "from ..."}, {"name": "to"}]}]},
                {"name": "relative", "signatures": [{"params": [{"name": "from"}, {"name": "to"}]}]},
                {
                    "name": "basename",
                    "desc": "<p>Return the last portion of a path.</p>",
                    "signatures": [{"params": [{"name": "p"}, {"name": "[ext]"}]}],
                },
            ],
            "properties": [{"name": "sep", "desc": "<p>The platform-specific file separator.</p>"}],
        },
        {
            "name": "http",
            "desc": '<ul>\n<li>one</li>\n<li>two "quoted"</li>\n</ul>',
            "methods": [
                {
                    "name": "createServer",
                    "desc": "<p>Returns a new web server object.</p>",
                    "signatures": [
                        {
                            "params": [{"name": "requestListener", "type": "Function", "desc": "Called per request"}],
                            "return": {"type": "http.Server"},
                        },
                        {"params": []},
                    ],
                }
            ],
            "classes": [
                {
                    "name": "http.Server",
                    "desc": "<p>This is an EventEmitter.</p>",
                    "events": [
                        {"name": "request", "desc": "<p>Emitted each time there is a request.\nMore detail.</p>"},
                        {"name": "checkContinue or upgrade", "desc": "<p>Prose entry.</p>"},
                        {"name": "close"},
                    ],
                    "properties": [{"name": "maxHeadersCount", "textRaw": "`maxHeadersCount` {Number}"}],
                }
            ],
        },
        {"name": "tls_(ssl)", "desc": "<h2>TLS</h2>\n<p>Use <code>openssl</code> \\ friends.</p>"},
    ],
    "miscs": [
        {"name": "Synopsis"},
        {
            "name": "Global Objects",
            "globals": [
                {
                    "name": "process",
                    "properties": [
                        {"name": "platform", "desc": "<p>What platform you're running on.</p>"},
                        {"name": "stderr", "textRaw": "process.stderr"},
                        {"name": "noDeprecation"},
                    ],
                },
                {"name": "__filename", "desc": "<p>The filename of the code being executed.</p>"},
            ],
        },
    ],
}


@pytest.fixture
def sample_doc():
    """Return a fresh copy of the raw sample documentation tree."""
    return copy.deepcopy(SAMPLE_DOC)


@pytest.fixture
def sample_tree(sample_doc):
    """Return the sample documentation tree converted to the typed model."""
    return load_doc_tree(sample_doc)
