"""CLI entry point for widgetguard.

Usage:
    python -m widgetguard validate dashboard.json
    python -m widgetguard validate - --permissive --json < dashboard.json
    python -m widgetguard types
    python -m widgetguard schema ProgressRing
    python -m widgetguard examples LineChart
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from widgetguard.catalog import get_examples, get_registry
from widgetguard.config import get_log_level
from widgetguard.core.log import get_logger, setup_logging
from widgetguard.schema import SchemaDefinitionError, SchemaRegistry, export_json_schema
from widgetguard.tree import WidgetDocumentError, parse_widget_tree
from widgetguard.validation import (
    UnknownTypePolicy,
    ValidationResult,
    ValidatorConfig,
    validate_tree,
)

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _load_registry(schema_file: Path | None) -> SchemaRegistry | None:
    try:
        return get_registry(schema_file)
    except (OSError, json.JSONDecodeError, SchemaDefinitionError) as e:
        logger.error(f"Cannot load widget schemas: {e}")
        return None


def _format_result(result: ValidationResult) -> str:
    if result.valid:
        return "valid"
    lines = [f"invalid: {len(result.errors)} error(s)"]
    for error in result.errors:
        path = "/" + "/".join(str(i) for i in error.path)
        target = f" {error.property}" if error.property else ""
        lines.append(f"  {path}{target} [{error.code.value}] {error.message}")
    return "\n".join(lines)


# =============================================================================
# Commands
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    try:
        if args.file == "-":
            text = sys.stdin.read()
        else:
            text = Path(args.file).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return EXIT_ERROR

    try:
        root = parse_widget_tree(text)
    except WidgetDocumentError as e:
        logger.error(str(e))
        return EXIT_ERROR

    registry = _load_registry(args.schema_file)
    if registry is None:
        return EXIT_ERROR

    try:
        config = ValidatorConfig.from_environment(
            unknown_type_policy=args.policy, max_depth=args.max_depth
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid validator settings: {e}")
        return EXIT_ERROR

    result = validate_tree(root, registry, config)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(_format_result(result))
    return EXIT_VALID if result.valid else EXIT_INVALID


def cmd_types(args: argparse.Namespace) -> int:
    """Handle the types command."""
    registry = _load_registry(args.schema_file)
    if registry is None:
        return EXIT_ERROR
    for type_name in registry.type_names():
        print(type_name)
    return EXIT_VALID


def cmd_schema(args: argparse.Namespace) -> int:
    """Handle the schema command."""
    registry = _load_registry(args.schema_file)
    if registry is None:
        return EXIT_ERROR
    schemas = export_json_schema(registry)
    if args.type:
        if args.type not in schemas:
            logger.error(f"Unknown widget type: {args.type}")
            return EXIT_INVALID
        schemas = schemas[args.type]
    print(json.dumps(schemas, indent=2))
    return EXIT_VALID


def cmd_examples(args: argparse.Namespace) -> int:
    """Handle the examples command."""
    examples = get_examples(args.type)
    if not examples:
        logger.error(f"No examples for widget type: {args.type}")
        return EXIT_INVALID
    print(
        json.dumps(
            [{"name": e.name, "document": e.document} for e in examples],
            indent=2,
        )
    )
    return EXIT_VALID


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="python -m widgetguard",
        description="Validate widget-tree JSON documents against widget schemas",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: WIDGETGUARD_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    schema_parent = argparse.ArgumentParser(add_help=False)
    schema_parent.add_argument(
        "--schema-file",
        type=Path,
        default=None,
        help="JSON schema configuration (default: WIDGETGUARD_SCHEMA_FILE or built-in)",
    )

    validate_parser = subparsers.add_parser(
        "validate", parents=[schema_parent], help="Validate a widget document"
    )
    validate_parser.add_argument("file", help="Document path, or '-' for stdin")
    policy = validate_parser.add_mutually_exclusive_group()
    policy.add_argument(
        "--strict",
        dest="policy",
        action="store_const",
        const=UnknownTypePolicy.STRICT,
        help="Report unregistered widget types",
    )
    policy.add_argument(
        "--permissive",
        dest="policy",
        action="store_const",
        const=UnknownTypePolicy.PERMISSIVE,
        help="Pass unregistered widget types through",
    )
    validate_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Deepest validated level (default: WIDGETGUARD_MAX_DEPTH or 64)",
    )
    validate_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    validate_parser.set_defaults(func=cmd_validate, policy=None)

    types_parser = subparsers.add_parser(
        "types", parents=[schema_parent], help="List registered widget types"
    )
    types_parser.set_defaults(func=cmd_types)

    schema_parser = subparsers.add_parser(
        "schema", parents=[schema_parent], help="Print JSON Schema export"
    )
    schema_parser.add_argument("type", nargs="?", help="Single widget type")
    schema_parser.set_defaults(func=cmd_schema)

    examples_parser = subparsers.add_parser(
        "examples", help="Print example widget documents"
    )
    examples_parser.add_argument("type", nargs="?", help="Root widget type filter")
    examples_parser.set_defaults(func=cmd_examples)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    setup_logging(get_log_level(args.log_level))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
