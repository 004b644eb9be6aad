# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Result model, presence markers, and decode options."""

from rtshape.core.markers import ABSENT, is_absent
from rtshape.core.options import (
    DEFAULT_OPTIONS,
    DecodeOptions,
    DecodeOptionsError,
    UnknownFields,
    load_decode_options,
)
from rtshape.core.result import (
    DecodeError,
    Err,
    Ok,
    Path,
    PathSegment,
    Result,
    err,
    is_err,
    is_ok,
    merge_errors,
    ok,
    prefix_errors,
)

__all__ = [
    # Markers
    "ABSENT",
    "is_absent",
    # Result model
    "DecodeError",
    "Err",
    "Ok",
    "Path",
    "PathSegment",
    "Result",
    "err",
    "is_err",
    "is_ok",
    "merge_errors",
    "ok",
    "prefix_errors",
    # Options
    "DEFAULT_OPTIONS",
    "DecodeOptions",
    "DecodeOptionsError",
    "UnknownFields",
    "load_decode_options",
]
