"""
CLI integration for model generation.

Provides the ``model`` subcommand: one sample payload in, one model
file out.
"""

import argparse
from pathlib import Path
from typing import Any, Dict

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree
from rich import box
from rich.markup import escape

from . import (
    generate_model,
    get_language_info,
    get_registry,
    is_language_supported,
    list_supported_languages,
    GeneratorConfig,
    load_config,
)
from .core.config import ConfigError
from ..analyzer import LiteralParseError, parse_literal, summarize_literal
from ..logging_config import get_logger
from ..utils import JSONLoaderError, load_text

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_model_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create the ``model`` subcommand parser.

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser for the model command
    """
    parser = subparsers.add_parser(
        "model",
        help="Generate a model class from a sample JSON payload",
        description="Infer a model from a sample payload and emit Dart source",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  clean-scaffold model user.json --root-name User
  clean-scaffold model --stdin --root-name LoginResponse -o login_model.dart < login.json
  clean-scaffold model --url https://example.com/products.json --root-name Product
  clean-scaffold model --list-languages
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="JSON file with a sample payload")
    input_group.add_argument("--url", help="URL to fetch the sample payload from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the sample payload from standard input"
    )

    parser.add_argument(
        "--language", "-l", default="dart", help="Target language (default: dart)"
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--root-name", default="Root", help="Name for the root class (default: Root)"
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't embed the sample payload as a doc comment",
    )
    parser.add_argument(
        "--legacy-wire-keys",
        action="store_true",
        help="Derive JSON keys from field names instead of keeping the original keys",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    parser.set_defaults(func=handle_model_command)
    return parser


def handle_model_command(args: argparse.Namespace) -> int:
    """
    Handle the model subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.file or args.url or args.stdin):
            console.print("[red]✗[/red] Input source required (file, --url, or --stdin)")
            return 1

        if not _validate_language(args.language):
            return 1

        literal_text = _get_input_text(args)
        config = _build_config(args)
        return _generate_and_output(literal_text, config, args)

    except CLIError as e:
        logger.error("%s", e)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(info["name"], info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not _validate_language(language, silent=True):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = (
        f"[bold]Language:[/bold] {info['name']}\n"
        f"[bold]File Extension:[/bold] {info['file_extension']}\n"
        f"[bold]Generator Class:[/bold] {info['class']}\n"
        f"[bold]Module:[/bold] {info['module']}\n"
        f"[bold]Reserved field names:[/bold] {info['reserved_words']}\n"
        f"[bold]Protected type names:[/bold] {info['builtin_types']}"
    )
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(
        Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green")
    )

    config = load_config(info["name"])
    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config_table.add_row("Add Comments", str(config.add_comments))
    config_table.add_row("Preserve Wire Keys", str(config.preserve_wire_keys))
    config_table.add_row("Disambiguate Names", str(config.disambiguate_names))
    config_table.add_row("Locator Name", config.locator_name)
    for key, value in sorted(config.language_config.items()):
        config_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(config_table)
    return 0


def _validate_language(language: str, silent: bool = False) -> bool:
    """Validate that a language is supported."""
    if not is_language_supported(language):
        if not silent:
            supported = list_supported_languages()
            console.print(f"[red]✗ Unsupported language '{language}'[/red]")
            console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
        return False
    return True


def _get_input_text(args: argparse.Namespace) -> str:
    """Get the sample payload text for the subcommand."""
    try:
        _, text = load_text(file_path=args.file, url=args.url, stdin=args.stdin)
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e
    return text


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI flags."""
    overrides: Dict[str, Any] = {}

    if args.no_comments:
        overrides["add_comments"] = False

    if args.legacy_wire_keys:
        overrides["preserve_wire_keys"] = False

    try:
        return load_config(
            get_registry().resolve(args.language),
            custom_config=overrides,
            config_file=args.config,
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _generate_and_output(
    literal_text: str, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate code and handle output with rich formatting."""
    language = args.language.lower()
    result = generate_model(literal_text, args.root_name, language, config)

    if not result.success:
        logger.warning("Model generation failed: %s", result.error_message)
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        if result.exception:
            console.print(f"[dim]Details: {result.exception}[/dim]")
        return 1

    if args.output:
        output_path = Path(args.output)
        try:
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                f.write(result.code)
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        logger.info("Wrote %s", output_path)
        console.print(f"[green]✓[/green] Generated model saved to [cyan]{output_path}[/cyan]")
    elif console.is_terminal:
        console.print(Syntax(result.code, result.metadata["language"], theme="monokai"))
    else:
        console.out(result.code, end="", highlight=False)

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)
        _print_shape(literal_text, args.root_name)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}", markup=True, highlight=False)

    return 0


def _print_shape(literal_text: str, root_name: str) -> None:
    """Show the sampled shape of the payload as a tree."""
    try:
        summary = summarize_literal(parse_literal(literal_text))
    except LiteralParseError:
        return

    tree = Tree(f"[bold]{root_name}[/bold]")
    _add_shape(tree, summary)
    console.print()
    console.print(tree)


def _add_shape(node: Tree, summary: Dict[str, Any]) -> None:
    for key, child in summary.get("children", {}).items():
        branch = node.add(f"{escape(key)} [dim]{_shape_label(child)}[/dim]", highlight=False)
        _add_shape(branch, child)

    if "child" in summary:
        branch = node.add(f"[0] [dim]{_shape_label(summary['child'])}[/dim]")
        _add_shape(branch, summary["child"])


def _shape_label(summary: Dict[str, Any]) -> str:
    if "length" in summary:
        return f"{summary['type']}[{summary['length']}]"
    return summary["type"]
