#!/usr/bin/env python3
"""
Copyright 2025 7th software Ltd.

Licensed under the Apache License, Version 2.0 (the "License"); you may not use this file except in compliance with the
License. You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software distributed under the License is distributed on an
"AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the License for the specific
language governing permissions and limitations under the License.

Progress and diagnostic output for the reference generator.

`echo` reports generation progress on stdout and is silent unless verbosity has been enabled with `set_verbosity`.
`warn` and `error` always write to stderr: warnings flag doubtful input that is still turned into output (for example a
factory method whose target class is not documented), errors flag input that had to be dropped or that aborts the run.
"""

from __future__ import annotations

import sys


VERBOSE = False


def echo(*args, **kwargs):
    """
    Write progress messages to stdout if verbosity is enabled.

    Parameters:
    - `*args`: The message(s) to be printed.
    - `**kwargs`: Additional keyword arguments to pass to the `print` function.
    """

    if VERBOSE:
        kwargs["flush"] = True
        print(*args, **kwargs)


def _write_stderr(prefix: str, args) -> None:
    msg = " ".join(str(a) for a in args)
    sys.stderr.write(prefix + msg + "\n")
    sys.stderr.flush()


def warn(*args, **kwargs):
    """
    Write a warning to stderr, regardless of the verbosity level.

    Parameters:
    - `*args`: Joined with spaces into a single message, prefixed with "Warning: ".
    - `**kwargs`: Not used.
    """

    _write_stderr("Warning: ", args)


def error(*args, **kwargs):
    """
    Writes an error message to stderr.

    Parameters:
    - `*args`: Variable number of arguments to be joined into a single error message string.
    - `**kwargs`: Not used.

    Notes:
    This function always writes to stderr, regardless of the current verbosity level.
    """

    _write_stderr("", args)


def set_verbosity(state: bool):
    """
    Enable or disable progress output.

    Parameters:
    - `state`: Set verbosity state to enabled (`True`) or disabled (`False`).
    """

    global VERBOSE

    VERBOSE = state
