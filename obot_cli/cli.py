"""
Obot CLI - Command-line interface.

This layer provides the user-facing CLI commands, using the core layer
for all decoding and encoding. It handles:
- Argument parsing
- TTY detection for human vs machine output
- Pretty formatting for human output
- JSON output for piping/automation
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from obot_cli.core.errors import CLIError, DecodeError
from obot_cli.core.types import Project, ProjectList
from obot_cli.version import get as get_version

logger = logging.getLogger(__name__)

# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (LLM/machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: CLIError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def read_input(path: str) -> str:
    """Read a document from a file, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text()


def decode_projects(text: str) -> Project | ProjectList:
    """Decode a single project (JSON object) or a project list (array or items envelope)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e}")

    if isinstance(data, list) or ProjectList.is_envelope(data):
        return ProjectList.from_list(data)
    return Project.from_dict(data)


# =============================================================================
# CLI Commands
# =============================================================================


class Version:
    """Print the version of this build."""

    def __init__(self, version: str | None = None):
        self.version = version if version is not None else get_version()

    def run(self, _args: Any = None) -> None:
        """Write the version line to stdout. Arguments are ignored."""
        print(f"Version: {self.version}")


def cmd_version(args: argparse.Namespace) -> None:
    """Print the version."""
    Version().run(args)


def cmd_projects_show(args: argparse.Namespace) -> None:
    """Decode projects from a file and print their normalized wire form."""
    try:
        decoded = decode_projects(read_input(args.file))
        if isinstance(decoded, ProjectList):
            logger.debug("Decoded %d project(s)", len(decoded))
            success_output(decoded.to_list())
        else:
            success_output(decoded.to_dict())
    except FileNotFoundError:
        error_output(CLIError(f"File not found: {args.file}"))
    except CLIError as e:
        error_output(e)


def _tree_node(project: Project, projects: ProjectList, seen: set[int]) -> dict[str, Any]:
    seen.add(id(project))
    return {
        "id": project.id,
        "name": project.name,
        "children": [
            _tree_node(child, projects, seen)
            for child in projects.children(project.id)
            if id(child) not in seen
        ],
    }


def _print_tree(node: dict[str, Any], depth: int = 0) -> None:
    label = node["name"] or "(unnamed)"
    print(f"{'  ' * depth}{label}  [{node['id']}]")
    for child in node["children"]:
        _print_tree(child, depth + 1)


def cmd_projects_tree(args: argparse.Namespace) -> None:
    """Print the parent/child hierarchy of a project list."""
    try:
        decoded = decode_projects(read_input(args.file))
        projects = decoded if isinstance(decoded, ProjectList) else ProjectList(items=[decoded])

        seen: set[int] = set()
        forest = [_tree_node(root, projects, seen) for root in projects.roots()]
        # projects in a parent cycle have no root; list them at top level
        for project in projects:
            if id(project) not in seen:
                forest.append(_tree_node(project, projects, seen))

        if is_tty():
            if not forest:
                print("No projects found.")
                return
            for node in forest:
                _print_tree(node)
        else:
            success_output({"data": forest})
    except FileNotFoundError:
        error_output(CLIError(f"File not found: {args.file}"))
    except CLIError as e:
        error_output(e)


# =============================================================================
# Argument Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="obot",
        description="Obot CLI - Command-line tools for the Obot platform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output Modes:
  TTY (human):  Pretty JSON and indented trees
  Pipe (LLM):   Compact JSON

Examples:
  obot version
  obot projects show projects.json
  curl -s $OBOT_URL/api/projects | obot projects tree -
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging on stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Version ==========
    version = subparsers.add_parser("version", help="Print the version")
    version.set_defaults(func=cmd_version)

    # ========== Projects ==========
    projects = subparsers.add_parser("projects", help="Inspect project documents")
    projects.set_defaults(func=lambda _a: projects.print_help())
    projects_sub = projects.add_subparsers(dest="subcommand")

    p_show = projects_sub.add_parser("show", help="Print normalized project JSON")
    p_show.add_argument("file", help="Project or project list JSON file (or - for stdin)")
    p_show.set_defaults(func=cmd_projects_show)

    p_tree = projects_sub.add_parser("tree", help="Print the project hierarchy")
    p_tree.add_argument("file", help="Project list JSON file (or - for stdin)")
    p_tree.set_defaults(func=cmd_projects_tree)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args, extra = parser.parse_known_args(argv)

    # version ignores whatever follows it
    if extra and args.command != "version":
        parser.error(f"unrecognized arguments: {' '.join(extra)}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()
