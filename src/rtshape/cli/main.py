# Copyright 2026 rtshape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the rtshape command-line interface."""

import argparse
import asyncio
import importlib
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from rtshape.core.options import DEFAULT_OPTIONS, DecodeOptions, DecodeOptionsError, UnknownFields, load_decode_options
from rtshape.core.result import Err
from rtshape.schema.describe import describe_schema
from rtshape.schema.model import Schema
from rtshape.schema.views import ViewKind, schema_view
from rtshape.types.base import Type

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the rtshape CLI."""
    parser = argparse.ArgumentParser(
        prog="rtshape",
        description="rtshape: decode and validate JSON data against type descriptors and schemas",
    )
    # options shared by every subcommand
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        parents=[common_parser],
        help="Decode and validate a JSON document",
        description=(
            "Decode a JSON document against a descriptor or schema view and run its validators. "
            "Prints the decoded document on success."
        ),
    )
    check_parser.add_argument(
        "target",
        help="Descriptor or schema to check against, as 'module:attribute'",
    )
    check_parser.add_argument(
        "data",
        help="JSON file to check, or '-' to read from standard input",
    )
    check_parser.add_argument(
        "--view",
        choices=[kind.value for kind in ViewKind],
        default=None,
        help="Schema view to decode through (default: strict; schemas only)",
    )
    check_parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help="YAML file with decode options",
    )
    check_parser.add_argument(
        "--unknown-fields",
        choices=[policy.value for policy in UnknownFields],
        default=None,
        help="Policy for undeclared object keys (overrides the options file)",
    )
    check_parser.add_argument(
        "--coerce-all",
        action="store_true",
        help="Enable every scalar, date and bigint coercion",
    )
    check_parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Only decode; skip semantic validators",
    )

    # describe subcommand
    describe_parser = subparsers.add_parser(
        "describe",
        parents=[common_parser],
        help="Describe a descriptor or schema",
        description="Print the field descriptions of a schema as JSON, or the signature of a descriptor.",
    )
    describe_parser.add_argument(
        "target",
        help="Descriptor or schema to describe, as 'module:attribute'",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


class _TargetError(Exception):
    """Raised when a 'module:attribute' target cannot be resolved."""


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "describe":
        return _cmd_describe(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        target = _load_target(args.target)
    except _TargetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if isinstance(target, Schema):
        descriptor = schema_view(target, args.view or ViewKind.STRICT)
    elif args.view is not None:
        print(f"Error: --view only applies to schemas, '{args.target}' is a descriptor.", file=sys.stderr)
        return 1
    else:
        descriptor = target

    try:
        opts = _build_options(args)
    except DecodeOptionsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        value = _read_json(args.data)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read JSON from '{args.data}': {exc}", file=sys.stderr)
        return 1

    result = descriptor.decode(value, opts)
    if not isinstance(result, Err) and not args.no_validate:
        result = asyncio.run(descriptor.validate(result.value, opts))

    if isinstance(result, Err):
        for error in result.errors:
            print(str(error), file=sys.stderr)
        return 1

    print(json.dumps(result.value, indent=2, default=_json_default))
    return 0


def _cmd_describe(args: argparse.Namespace) -> int:
    """Handle the describe subcommand."""
    try:
        target = _load_target(args.target)
    except _TargetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if isinstance(target, Schema):
        print(json.dumps(describe_schema(target), indent=2))
    else:
        print(target.print())
    return 0


def _load_target(target_ref: str) -> Type[Any] | Schema:
    """Import the descriptor or schema named by a 'module:attribute' string."""
    module_name, _, attribute = target_ref.partition(":")
    if not module_name or not attribute:
        raise _TargetError(f"target '{target_ref}' must have the form 'module:attribute'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise _TargetError(f"cannot import module '{module_name}': {exc}") from exc

    for name in attribute.split("."):
        try:
            target = getattr(target, name)
        except AttributeError:
            raise _TargetError(f"module '{module_name}' has no attribute '{attribute}'") from None

    if not isinstance(target, (Type, Schema)):
        raise _TargetError(f"'{target_ref}' is neither a type descriptor nor a schema")
    logger.debug("Loaded target %s (%s)", target_ref, type(target).__name__)
    return target


def _build_options(args: argparse.Namespace) -> DecodeOptions:
    """Combine the options file with the command-line overrides."""
    opts = load_decode_options(args.options) if args.options is not None else DEFAULT_OPTIONS
    overrides: dict[str, Any] = {}
    if args.unknown_fields is not None:
        overrides["unknown_fields"] = UnknownFields(args.unknown_fields)
    if args.coerce_all:
        overrides["coerce_all"] = True
    return opts.model_copy(update=overrides) if overrides else opts


def _read_json(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
