from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .codegen.core.config import ConfigError, GeneratorConfig, load_config
from .feature import (
    FeatureSpec,
    FeatureSpecError,
    ScaffoldError,
    ScaffoldResult,
    feature_root,
    scaffold_feature,
    write_artifacts,
)
from .logging_config import get_logger
from .utils import JSONLoaderError, load_feature_spec

logger = get_logger(__name__)


class CLIHandler:
    """Handle the ``feature`` subcommand: load, scaffold, write, report."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler."""
        self.feature: FeatureSpec | None = None
        self.source: str | None = None
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def set_feature(self, feature: FeatureSpec, source: str) -> None:
        """Set the feature description and where it came from.

        Args:
            feature: The validated feature description.
            source: The source name or identifier.
        """
        self.feature = feature
        self.source = source
        logger.info("Feature %s set from source: %s", feature.name, source)

    def load(self, args: Any) -> bool:
        """Load the feature description named by the CLI arguments."""
        spec = getattr(args, "spec", None)
        try:
            if spec == "-":
                source, feature = load_feature_spec(stdin=True)
            elif spec and spec.startswith(("http://", "https://")):
                source, feature = load_feature_spec(url=spec)
            else:
                source, feature = load_feature_spec(file_path=spec)
        except (JSONLoaderError, FileNotFoundError) as e:
            self.console.print(f"❌ [red]Failed to load feature description: {e}[/red]")
            logger.error("Failed to load feature description: %s", e)
            return False
        except FeatureSpecError as e:
            self.console.print(f"❌ [red]Invalid feature description: {e}[/red]")
            logger.error("Invalid feature description: %s", e)
            return False

        self.set_feature(feature, source)
        return True

    def run(self, args: Any) -> int:
        """Scaffold the loaded feature according to parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        if self.feature is None:
            self.console.print("❌ [red]No feature loaded[/red]")
            logger.warning("No feature loaded; aborting CLI run")
            return 1

        self.console.print(f"📄 Loaded: {self.source}")

        try:
            config = self._build_config(args)
            result = scaffold_feature(self.feature, config)
        except ConfigError as e:
            self.console.print(f"❌ [red]Configuration error: {e}[/red]")
            logger.error("Configuration error: %s", e)
            return 1
        except (FeatureSpecError, ScaffoldError) as e:
            self.console.print(f"❌ [red]Scaffolding failed: {e}[/red]")
            logger.error("Scaffolding failed: %s", e)
            return 1

        output_dir = Path(getattr(args, "output", None) or ".")

        if getattr(args, "dry_run", False):
            self._print_layout(result, output_dir)
            self._print_summary(result, written=False)
            return 0

        root = feature_root(result, output_dir)
        if root.exists():
            self.console.print(
                f"⚠️  [yellow]{root} already exists; nothing was written[/yellow]"
            )
            logger.warning("Refusing to overwrite existing feature at %s", root)
            return 1

        try:
            write_artifacts(result, output_dir)
        except ScaffoldError as e:
            self.console.print(f"❌ [red]{e}[/red]")
            logger.error("%s", e)
            return 1

        self._print_summary(result, written=True)
        self.console.print(f"✅ [green]Feature written to {root}[/green]")
        return 0

    def _build_config(self, args: Any) -> GeneratorConfig:
        overrides = {}
        if getattr(args, "no_comments", False):
            overrides["add_comments"] = False
        if getattr(args, "locator", None):
            overrides["locator_name"] = args.locator
        return load_config(
            "dart", custom_config=overrides, config_file=getattr(args, "config", None)
        )

    def _print_layout(self, result: ScaffoldResult, output_dir: Path) -> None:
        """Show the directory tree the feature would be written as."""
        tree = Tree(f"📁 {feature_root(result, output_dir)}")
        branches = {}

        for directory in result.directories:
            parent = tree
            for depth, part in enumerate(directory.split("/")):
                key = "/".join(directory.split("/")[: depth + 1])
                if key not in branches:
                    branches[key] = parent.add(f"📁 {part}")
                parent = branches[key]

        for path in result.paths():
            folder, _, name = path.rpartition("/")
            (branches[folder] if folder else tree).add(f"📄 {name}")

        self.console.print(tree)

    def _print_summary(self, result: ScaffoldResult, written: bool) -> None:
        """Print the artifact table and any warnings."""
        title = "📦 Generated Files" if written else "📦 Files (dry run)"
        table = Table(title=title, box=box.ROUNDED, title_style="bold cyan")
        table.add_column("File", style="cyan")
        table.add_column("Lines", justify="right", style="green")

        for artifact in result.artifacts:
            table.add_row(artifact.relative_path, str(artifact.source_text.count("\n")))

        self.console.print(table)

        if result.warnings:
            self.console.print("\n[yellow]⚠️  Warnings:[/yellow]")
            for warning in result.warnings:
                self.console.print(f"  [yellow]•[/yellow] {warning}", highlight=False)


def create_feature_subparser(subparsers) -> argparse.ArgumentParser:
    """Create the ``feature`` subcommand parser."""
    parser = subparsers.add_parser(
        "feature",
        help="Scaffold a clean-architecture feature from a feature description",
        description="Generate models, data, domain and presentation layers for one feature",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Feature description (JSON):
  {"name": "auth",
   "endpoints": [{"name": "login", "path": "/auth/login", "verb": "POST",
                  "request": {"email": "a@b.c"}, "response": {"token": "x"}}]}

Examples:
  clean-scaffold feature auth.json --output lib/features
  clean-scaffold feature auth.json --output lib/features --dry-run
  cat auth.json | clean-scaffold feature - --output lib/features
        """.strip(),
    )
    parser.add_argument(
        "spec", help="Feature description: a JSON file, an http(s) URL, or - for stdin"
    )
    parser.add_argument(
        "--output", "-o", default=".", help="Directory that receives the feature root"
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument("--locator", help="Service locator symbol used by the DI file")
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't embed sample payloads as doc comments",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be written and exit"
    )
    parser.set_defaults(func=handle_feature_command)
    return parser


def handle_feature_command(args: argparse.Namespace) -> int:
    handler = CLIHandler()
    if not handler.load(args):
        return 1
    return handler.run(args)
