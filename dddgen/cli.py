"""
Command-line interface for dddgen.

Subcommands:
  generate  Generate entity components from an OpenAPI or proto document
  new       Scaffold a new project (optionally into a cloned repository)
  formats   List supported input formats
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .codegen.core.config import get_config_manager, load_config
from .codegen.core.errors import CliError
from .codegen.core.generator import ComponentFactory
from .codegen.registry import ParserRegistry, default_registry
from .executor import FileExecutor
from .logging_config import get_logger, setup_logging
from .pipeline import CodeGenerationPipeline, PipelineResult

logger = get_logger(__name__)

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="dddgen",
        description="Generate domain-driven Go components from OpenAPI and Protocol Buffers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dddgen generate api.yaml --destination ./service
  dddgen generate user.proto --type proto --dry-run
  dddgen new my-service --repo https://github.com/acme/my-service.git
  dddgen formats
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    _add_generate_parser(subparsers)
    _add_new_parser(subparsers)

    formats = subparsers.add_parser("formats", help="List supported input formats")
    formats.set_defaults(func=_handle_formats)

    return parser


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--destination",
        "-d",
        metavar="DIR",
        help="Directory to write generated files to",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the files that would be written without writing them",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Generator configuration file (JSON or YAML)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def _add_generate_parser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "generate",
        help="Generate components from an input document",
        description="Generate entity, repository, command, query, handler and "
        "service files for every aggregate in an OpenAPI or proto document",
    )
    parser.add_argument("input", help="Input file path or http(s) URL")
    parser.add_argument(
        "--type",
        "-t",
        dest="input_type",
        choices=["openapi", "proto"],
        help="Input format (detected by validating with each adapter by default)",
    )
    parser.add_argument(
        "--preserve-existing",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Skip files that already exist in the destination (default: on)",
    )
    parser.add_argument(
        "--no-tests",
        action="store_true",
        help="Do not generate Go test files",
    )
    _add_common_args(parser)
    parser.set_defaults(func=_handle_generate)
    return parser


def _add_new_parser(subparsers: Any) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "new",
        help="Scaffold a new project",
        description="Create main.go, go.mod, README.md, Makefile and "
        "config.yaml.example for a new project",
    )
    parser.add_argument("project_name", metavar="PROJECT", help="Project (Go module) name")
    parser.add_argument(
        "--repo",
        metavar="URL",
        help="Clone this git repository first and keep its existing files",
    )
    _add_common_args(parser)
    parser.set_defaults(func=_handle_new)
    return parser


def _build_pipeline(args: argparse.Namespace) -> CodeGenerationPipeline:
    overrides = {}
    if getattr(args, "no_tests", False):
        overrides["generate_tests"] = False

    config = load_config(custom_config=overrides or None, config_file=args.config)
    for warning in get_config_manager().validate_config(config):
        logger.warning("Configuration: %s", warning)

    return CodeGenerationPipeline(
        registry=default_registry(),
        factory=ComponentFactory(config=config),
        executor=FileExecutor(console=console),
    )


def _handle_generate(args: argparse.Namespace) -> int:
    pipeline = _build_pipeline(args)
    destination = args.destination or "."

    with console.status(f"[bold green]Generating from {args.input}..."):
        result = pipeline.generate(
            args.input,
            destination,
            input_type=args.input_type,
            dry_run=args.dry_run,
            preserve_existing=args.preserve_existing,
        )

    _print_summary(result, destination, args.dry_run)
    return 0


def _handle_new(args: argparse.Namespace) -> int:
    pipeline = _build_pipeline(args)
    destination = args.destination or args.project_name

    result = pipeline.create_project(
        args.project_name,
        destination,
        dry_run=args.dry_run,
        preserve_existing=Path(destination).exists(),
        repo_url=args.repo,
    )

    _print_summary(result, destination, args.dry_run)
    if not args.dry_run:
        console.print(
            Panel(
                f"[cyan]cd {destination}[/cyan]\n[cyan]make deps[/cyan]\n[cyan]make test[/cyan]",
                title="Next steps",
                border_style="blue",
            )
        )
    return 0


def _handle_formats(args: argparse.Namespace, registry: Optional[ParserRegistry] = None) -> int:
    registry = registry or default_registry()

    table = Table(title="Supported Input Formats", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Format", style="bold green", no_wrap=True)
    table.add_column("Extensions", style="cyan")
    table.add_column("--type", style="blue")

    for name in registry.list_formats():
        table.add_row(
            name,
            ", ".join(registry.list_extensions(name)),
            ", ".join(registry.list_aliases(name)) or "[dim]none[/dim]",
        )

    console.print(table)
    return 0


def _print_summary(result: PipelineResult, destination: str, dry_run: bool) -> None:
    verb = "Would write" if dry_run else "Wrote"
    lines = [f"[bold]{verb}:[/bold] {result.written_count} file(s) to {destination}"]
    if result.entity_count:
        lines.append(f"[bold]Entities:[/bold] {result.entity_count}")
    if result.preserved:
        lines.append(f"[bold]Preserved:[/bold] {result.preserved_count} existing file(s)")
        lines.extend(f"  [dim]{path}[/dim]" for path in result.preserved)

    console.print(Panel("\n".join(lines), title="✅ Done", border_style="green"))


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 2

    setup_logging(verbose=getattr(args, "verbose", False))

    try:
        return args.func(args)
    except CliError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        return e.exit_code
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        return 130
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]✗ Unexpected error:[/red] {escape(str(e))}")
        return 1
