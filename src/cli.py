"""
Studio CLI
Export saved trees to React or Vue, list saved projects and generate DataList rows.
"""

import argparse
import sys
from pathlib import Path
from typing import Sequence

from injector import Injector
from pydantic import ValidationError as PydanticValidationError
from returns.pipeline import is_successful

from blueprint import Node
from clients.ai import GenerationError, ListItemGenerator
from clients.projects import ProjectStore
from codegen import CodeExporter, Dialect
from core import (
    JSONParseError,
    LogContext,
    configure_logging,
    create_container,
    get_logger,
    get_settings,
    loads,
    safe_json_dumps,
    validate_tree,
)
from core.id import Prefix, extract_prefix


logger = get_logger(__name__)


class CLIError(Exception):
    """Command failed with a message meant for the user."""

    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orion-studio", description="Orion Studio command line tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Generate source code for a tree")
    export_parser.add_argument("source", help="Path to a tree JSON file, or a saved project id (proj_...)")
    export_parser.add_argument(
        "--dialect",
        choices=[dialect.value for dialect in Dialect],
        default=Dialect.REACT.value,
        help="Target framework (default: react)",
    )
    export_parser.add_argument("--out", type=Path, help="Write to this file instead of stdout")

    subparsers.add_parser("projects", help="List saved projects")

    items_parser = subparsers.add_parser("generate-items", help="Generate DataList rows with Gemini")
    items_parser.add_argument("prompt", help="What the list should contain")

    return parser


def open_projects(container: Injector) -> ProjectStore:
    try:
        return container.get(ProjectStore)
    except JSONParseError as e:
        raise CLIError(f"Cannot read saved projects: {e}") from e


def load_source(source: str, container: Injector) -> Node:
    """
    Resolve ``source`` to a tree; the project store is only opened for project ids.

    Raises:
        CLIError: If the project or file is missing or the tree is invalid
    """
    if extract_prefix(source) == Prefix.PROJECT and not Path(source).exists():
        project = open_projects(container).load_project(source)
        if project is None:
            raise CLIError(f"Unknown project: {source}")
        return project.tree

    path = Path(source)
    if not path.is_file():
        raise CLIError(f"No such file: {source}")

    try:
        payload = loads(path.read_bytes())
    except JSONParseError as e:
        raise CLIError(f"{source}: {e}") from e

    validation = validate_tree(payload)
    if not is_successful(validation):
        raise CLIError(f"{source}: {validation.failure().message}")
    try:
        return Node.from_wire(payload)
    except PydanticValidationError as e:
        raise CLIError(f"{source}: {e.error_count()} invalid fields") from e


def export_command(args: argparse.Namespace, container: Injector) -> str:
    tree = load_source(args.source, container)
    with LogContext(command="export", dialect=args.dialect):
        code = container.get(CodeExporter).export(tree, args.dialect)

    if args.out is None:
        return code
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(code + "\n", encoding="utf-8")
    logger.info("export_written", path=str(args.out), chars=len(code))
    return f"Wrote {args.out}"


def projects_command(args: argparse.Namespace, container: Injector) -> str:
    projects = open_projects(container).list_projects()
    if not projects:
        return "No saved projects"
    return "\n".join(f"{p.id}  {p.saved_at:%Y-%m-%d %H:%M}  {p.name}" for p in projects)


def generate_items_command(args: argparse.Namespace, container: Injector) -> str:
    with LogContext(command="generate-items"):
        try:
            items = container.get(ListItemGenerator).generate_list_items(args.prompt)
        except GenerationError as e:
            raise CLIError(str(e)) from e
    return safe_json_dumps([item.model_dump(exclude_none=True) for item in items], indent=2)


COMMANDS = {
    "export": export_command,
    "projects": projects_command,
    "generate-items": generate_items_command,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    container = create_container(settings)

    try:
        output = COMMANDS[args.command](args, container)
    except CLIError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
