# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decode options and the YAML loader for options files."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class DecodeOptionsError(Exception):
    """Raised when a decode options file cannot be read or is invalid."""


class UnknownFields(Enum):
    """Policy for input keys that a struct or schema view does not declare."""

    REJECT = "reject"
    DROP = "drop"
    DISCARD = "discard"


class DecodeOptions(BaseModel):
    """Per-call decode configuration.

    The coercion flags only widen what scalar descriptors accept; they never
    change how a value that already has the right kind is decoded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    coerce_number_to_string: bool = Field(default=False, alias="coerce-number-to-string")
    coerce_number_to_boolean: bool = Field(default=False, alias="coerce-number-to-boolean")
    coerce_string_to_number: bool = Field(default=False, alias="coerce-string-to-number")
    coerce_scalar: bool = Field(default=False, alias="coerce-scalar")

    coerce_string_to_date: bool = Field(default=False, alias="coerce-string-to-date")
    coerce_number_to_date: bool = Field(default=False, alias="coerce-number-to-date")
    coerce_date: bool = Field(default=False, alias="coerce-date")

    coerce_string_to_bigint: bool = Field(default=False, alias="coerce-string-to-bigint")
    coerce_number_to_bigint: bool = Field(default=False, alias="coerce-number-to-bigint")
    coerce_bigint: bool = Field(default=False, alias="coerce-bigint")

    coerce_all: bool = Field(default=False, alias="coerce-all")

    accept_nan: bool = Field(default=False, alias="accept-nan")

    unknown_fields: UnknownFields = Field(default=UnknownFields.REJECT, alias="unknown-fields")

    @property
    def number_to_string(self) -> bool:
        return self.coerce_number_to_string or self.coerce_scalar or self.coerce_all

    @property
    def number_to_boolean(self) -> bool:
        return self.coerce_number_to_boolean or self.coerce_scalar or self.coerce_all

    @property
    def string_to_number(self) -> bool:
        return self.coerce_string_to_number or self.coerce_scalar or self.coerce_all

    @property
    def string_to_date(self) -> bool:
        return self.coerce_string_to_date or self.coerce_date or self.coerce_all

    @property
    def number_to_date(self) -> bool:
        return self.coerce_number_to_date or self.coerce_date or self.coerce_all

    @property
    def string_to_bigint(self) -> bool:
        return self.coerce_string_to_bigint or self.coerce_bigint or self.coerce_all

    @property
    def number_to_bigint(self) -> bool:
        return self.coerce_number_to_bigint or self.coerce_bigint or self.coerce_all


DEFAULT_OPTIONS = DecodeOptions()


def load_decode_options(path: Path) -> DecodeOptions:
    """Load decode options from a YAML file.

    An empty file yields the default options.

    Args:
        path: Path to the YAML options file.

    Returns:
        A validated, immutable :class:`DecodeOptions` instance.

    Raises:
        DecodeOptionsError: If the file cannot be read, contains invalid YAML,
            is not a mapping, or does not match the options model.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DecodeOptionsError(f"Options file not found: {path}") from None
    except OSError as exc:
        raise DecodeOptionsError(f"Cannot read options file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise DecodeOptionsError(f"Invalid YAML in options file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DecodeOptionsError(f"{path}: options file must be a YAML mapping")

    try:
        options = DecodeOptions.model_validate(data)
    except ValidationError as exc:
        raise DecodeOptionsError(f"Invalid options file '{path}': {exc}") from exc

    logger.debug("Loaded decode options from %s: %s", path, options)
    return options
