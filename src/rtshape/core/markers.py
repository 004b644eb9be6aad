# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Presence markers shared by every descriptor.

``None`` is the null marker (a value explicitly cleared). ``ABSENT`` is the
absent marker (a value not provided at all), which is what a missing key in an
input mapping reads as.
"""

from __future__ import annotations

from typing import Any, Final

# ###############
# Public Interface
# ###############


class _AbsentType:
    """Type of the :data:`ABSENT` singleton."""

    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _AbsentType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _AbsentType:
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _AbsentType()


def is_absent(value: object) -> bool:
    """Return True if *value* is the absent marker."""
    return value is ABSENT
