"""
Command line interface.

Renders a Jinja2 template through a CxxBuilder, so the template can be
written with natural two-space indentation, and writes the result to a
C/C++ file or shows it on the terminal.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from . import __version__
from .builder import CxxBuilder
from .core.config import BuilderConfig, get_config_manager, load_config
from .core.errors import CodeBuilderError
from .core.templates import macro_case
from .logging_config import configure_logging, get_logger
from .utils import load_context, write_source

logger = get_logger(__name__)

# Initialize rich consoles, diagnostics go to stderr
console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cxxcodebuilder",
        description="Render a template into a well-formatted C/C++ source file",
    )

    parser.add_argument("template", metavar="TEMPLATE", help="Jinja2 template file")

    parser.add_argument(
        "--context",
        "-c",
        metavar="FILE",
        help="JSON file with template variables",
    )

    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Output file for generated code (default: stdout)",
    )

    parser.add_argument(
        "--config", metavar="FILE", help="JSON configuration file"
    )

    parser.add_argument(
        "--indent",
        metavar="UNIT",
        help="Indentation unit: 'tab' or a number of spaces",
    )

    guard_group = parser.add_mutually_exclusive_group()
    guard_group.add_argument(
        "--guard",
        metavar="NAME",
        help="Wrap the output in #ifndef NAME header guards",
    )
    guard_group.add_argument(
        "--auto-guard",
        action="store_true",
        help="Derive the header guard name from the output file name",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def _parse_indent(value: str) -> str:
    if value.lower() in ("tab", "tabs", "\\t"):
        return "\t"
    try:
        width = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid indentation unit: {value!r} (use 'tab' or a number)"
        )
    if width <= 0:
        raise argparse.ArgumentTypeError(f"Indentation width must be positive: {width}")
    return " " * width


def _guard_name(args: argparse.Namespace) -> Optional[str]:
    if args.guard:
        return args.guard
    if args.auto_guard:
        if not args.output:
            raise CodeBuilderError("--auto-guard requires --output")
        return macro_case(Path(args.output).name)
    return None


def render(args: argparse.Namespace) -> Tuple[str, BuilderConfig]:
    """
    Render the template described by parsed arguments.

    Returns:
        Generated source text and the configuration used
    """
    template_path = Path(args.template)
    if not template_path.is_file():
        raise CodeBuilderError(f"Template not found: {template_path}")

    overrides = {"template_dir": str(template_path.parent)}
    if args.indent:
        overrides["indent_string"] = _parse_indent(args.indent)
    config = load_config(custom_config=overrides, config_file=args.config)

    for warning in get_config_manager().validate_config(config):
        err_console.print(
            f"[yellow]⚠ {escape(warning)}[/yellow]", highlight=False, soft_wrap=True
        )

    context = load_context(args.context) if args.context else {}

    builder = CxxBuilder(config)
    if config.header_comment:
        builder.comment(config.header_comment)

    guard = _guard_name(args)
    if guard:
        with builder.guard_macros(guard):
            builder.add_template_file(template_path.name, **context)
    else:
        builder.add_template_file(template_path.name, **context)

    return builder.snapshot(), config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments without the program name, defaults to sys.argv

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        code, config = render(args)

        if args.output:
            written = write_source(args.output, code, config.line_ending)
            if written:
                console.print(f"[green]✓[/green] Wrote {escape(args.output)}", soft_wrap=True)
            else:
                console.print(f"[dim]✓ {escape(args.output)} is up to date[/dim]", soft_wrap=True)
        elif console.is_terminal:
            syntax = Syntax(code, "c", theme="monokai", line_numbers=False)
            console.print(Panel(syntax, title=escape(args.template), expand=False))
        else:
            # Plain write: rich would expand tabs
            sys.stdout.write(code)

        return 0

    except argparse.ArgumentTypeError as e:
        err_console.print(f"[red]✗ Error:[/red] {escape(str(e))}", soft_wrap=True)
        return 1
    except CodeBuilderError as e:
        err_console.print(f"[red]✗ Error:[/red] {escape(str(e))}", soft_wrap=True)
        logger.debug("Generation failed", exc_info=True)
        return 1
