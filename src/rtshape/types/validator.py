# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic validator chains.

A validator is a predicate that receives an already structurally valid value
and returns a :class:`~rtshape.core.result.Result`. It may be a plain function
or a coroutine function; the chain awaits whatever it gets back.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Union

from rtshape.core.result import Err, Result, err, ok

# ###############
# Public Interface
# ###############

Validator = Callable[[Any], Union[Result[Any], Awaitable[Result[Any]]]]


async def run_validators(validators: Iterable[Validator], value: Any) -> Result[Any]:
    """Run *validators* in order against *value*.

    The first failing validator's error becomes the result; later validators
    are not called.

    Returns:
        ``Ok(value)`` if every validator succeeds, otherwise the first ``Err``.
    """
    for validator in validators:
        result = validator(value)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Err):
            return result
    return ok(value)


def check(predicate: Callable[[Any], bool], message: str) -> Validator:
    """Build a validator from a boolean predicate and a failure message."""

    def _validator(value: Any) -> Result[Any]:
        return ok(value) if predicate(value) else err(message)

    return _validator
