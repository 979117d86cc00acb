"""
Command-line interface for binding generation.

Runs the generator over a batch of schema files and reports per-file and
per-block results with rich formatting.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import generate_block_files, generate_code
from .codegen.core.config import (
    ConfigError,
    GeneratorConfig,
    get_config_manager,
    load_config,
)
from .codegen.core.generator import CodeGenerator, GenerationResult
from .codegen.core.schema import SchemaError
from .codegen.registry import (
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, discover_schema_files, load_schema

logger = get_logger(__name__)

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


@dataclass
class FileRun:
    """Outcome of one schema file in a batch run."""

    source: str
    ok: bool = True
    error: str = ""
    outputs: list[str] = field(default_factory=list)
    result: GenerationResult | None = None


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="api-bindgen",
        description="Generate typed host-object bindings from API schema files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  api-bindgen samples/app.json
  api-bindgen schemas/ -o gen/
  api-bindgen schemas/ -o gen/ --per-block --process main
  api-bindgen --url https://example.com/electron-api.json -o gen/
  api-bindgen --list-languages
        """.strip(),
    )

    # Input options
    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="INPUT",
        help="Schema files or directories of *.json schema files",
    )
    parser.add_argument("--url", help="URL to fetch a schema document from")

    # Core generation options
    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Output directory (default: print a single file to stdout)",
    )
    parser.add_argument(
        "--language",
        "-l",
        default="go",
        help="Target language for code generation (default: go)",
    )
    parser.add_argument("--config", metavar="FILE", help="Configuration file path (JSON)")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    # Common options
    common_group = parser.add_argument_group("common generation options")
    common_group.add_argument(
        "--package", "--package-name", dest="package_name", help="Package name"
    )
    common_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )
    common_group.add_argument(
        "--no-tags",
        action="store_true",
        help="Don't add source-name tags to struct fields",
    )
    common_group.add_argument(
        "--host-handle",
        metavar="NAME",
        help="Name of the host handle field (empty string embeds it)",
    )
    common_group.add_argument(
        "--per-block",
        action="store_true",
        help="Write every block to its own file and package",
    )
    common_group.add_argument(
        "--process",
        choices=["main", "renderer"],
        help="Only generate blocks available in this process",
    )
    common_group.add_argument(
        "--strict-events",
        action="store_true",
        help="Fail a block on suspicious event names instead of warning",
    )
    common_group.add_argument(
        "--write-config",
        metavar="FILE",
        help="Write the effective configuration to FILE",
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

    # Diagnostics
    log_group = parser.add_argument_group("diagnostics")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (default: WARNING)",
    )
    log_group.add_argument("--log-file", metavar="FILE", help="Also log to FILE")
    log_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show generation metadata and all warnings",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point of the ``api-bindgen`` command.

    Returns:
        Exit code (0 when every file was processed, 1 otherwise)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    logger.debug("Arguments: %s", args)

    try:
        # Handle info commands
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not is_language_supported(args.language):
            supported = ", ".join(list_supported_languages())
            raise CLIError(
                f"Unsupported language '{args.language}' (supported: {supported})"
            )

        config = _build_config(args)

        if args.write_config:
            get_config_manager().save_config(config, args.write_config)
            console.print(
                f"[green]✓[/green] Configuration written to [cyan]{args.write_config}[/cyan]"
            )
            if not (args.inputs or args.url):
                return 0

        if not (args.inputs or args.url):
            raise CLIError("Input source required (files, directories or --url)")

        generator = get_generator(args.language, config)
        return _run_batch(args, generator)

    except (CLIError, ConfigError, RegistryError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    overrides = {}

    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.no_comments:
        overrides["add_comments"] = False
    if args.no_tags:
        overrides["generate_tags"] = False
    if args.host_handle is not None:
        overrides["host_handle_field"] = args.host_handle
    if args.per_block:
        overrides["per_block_output"] = True
    if args.process:
        overrides["process_filter"] = args.process
    if args.strict_events:
        overrides["event_literal_mode"] = "strict"

    language = get_registry().resolve(args.language)
    config = load_config(language, custom_config=overrides, config_file=args.config)

    for problem in get_config_manager().validate_config(config, language):
        logger.warning("Configuration: %s", problem)
        console.print(f"[yellow]⚠️  Configuration:[/yellow] {problem}")

    return config


def _jobs(args: argparse.Namespace) -> list[tuple[str, dict]]:
    """Schema documents of the run as (label, loader arguments) pairs."""
    try:
        paths = discover_schema_files(args.inputs)
    except FileNotFoundError as e:
        raise CLIError(str(e)) from e

    jobs = [(str(path), {"file_path": path}) for path in paths]
    if args.url:
        jobs.append((args.url, {"url": args.url}))
    return jobs


def _output_stem(label: str, loader_args: dict) -> str:
    if "file_path" in loader_args:
        return Path(loader_args["file_path"]).stem
    return Path(urlparse(label).path).stem or "schema"


def _run_batch(args: argparse.Namespace, generator: CodeGenerator) -> int:
    """Generate every schema file of the run and print the summary."""
    jobs = _jobs(args)
    if not jobs:
        console.print("[red]✗[/red] No schema files to process")
        return 1

    out_dir = Path(args.output) if args.output else None
    if out_dir is None and (len(jobs) > 1 or generator.config.per_block_output):
        raise CLIError("--output is required for several inputs or --per-block")

    runs: list[FileRun] = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        for label, loader_args in jobs:
            task = progress.add_task(f"[cyan]Generating {label}...", total=None)
            runs.append(_process_file(generator, label, loader_args, out_dir))
            progress.remove_task(task)

    if out_dir is None and runs[0].ok and runs[0].result is not None:
        _print_code(runs[0].result.code, generator.language_name)

    _print_summary(runs)
    if args.verbose:
        _print_details(runs)
    else:
        _print_failed_blocks(runs)

    failed = [run for run in runs if not run.ok]
    processed = len(runs) - len(failed)
    logger.info("%d of %d schema files processed", processed, len(runs))
    return 1 if failed or processed == 0 else 0


def _process_file(
    generator: CodeGenerator, label: str, loader_args: dict, out_dir: Path | None
) -> FileRun:
    """Load, generate and write one schema file; errors stay in the run."""
    run = FileRun(source=label)

    try:
        schema_file = load_schema(**loader_args)
    except (JSONLoaderError, FileNotFoundError, SchemaError) as e:
        logger.error("Cannot load %s: %s", label, e)
        run.ok = False
        run.error = str(e)
        return run

    if generator.config.per_block_output:
        result = generate_block_files(generator, schema_file, out_dir)
    else:
        result = generate_code(generator, schema_file)
    run.result = result

    if not result.success:
        run.ok = False
        run.error = result.error_message
        return run

    if generator.config.per_block_output:
        run.outputs = [
            str(generator.block_output_path(block, out_dir))
            for block in schema_file
            if block.name in {outcome.name for outcome in result.report.generated}
        ]
    elif out_dir is not None and result.code:
        stem = _output_stem(label, loader_args)
        output_path = out_dir / f"{stem}{generator.file_extension}"
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", output_path, e)
            run.ok = False
            run.error = f"Failed to write {output_path}: {e}"
            return run
        run.outputs = [str(output_path)]

    return run


def _print_code(code: str, language: str) -> None:
    if not code:
        console.print("[yellow]⚠️  No declarations generated[/yellow]")
        return
    console.print(Syntax(code, language, theme="monokai"))


def _print_summary(runs: list[FileRun]) -> None:
    table = Table(
        title="📊 Generation Summary",
        box=box.ROUNDED,
        title_style="bold cyan",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Source", style="bold")
    table.add_column("Generated", justify="right", style="green")
    table.add_column("Skipped", justify="right", style="dim")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Output")

    for run in runs:
        if not run.ok:
            table.add_row(run.source, "-", "-", "-", f"[red]✗ {run.error}[/red]")
            continue
        report = run.result.report
        table.add_row(
            run.source,
            str(len(report.generated)),
            str(len(report.skipped)),
            str(len(report.failed)),
            "\n".join(run.outputs) if run.outputs else "[dim]stdout[/dim]",
        )

    console.print()
    console.print(table)


def _print_failed_blocks(runs: list[FileRun]) -> None:
    for run in runs:
        if run.result is None or run.result.report is None:
            continue
        for outcome in run.result.report.failed:
            console.print(
                f"[red]✗[/red] {run.source}: block [bold]{outcome.name}[/bold] "
                f"failed: {outcome.reason}"
            )


def _print_details(runs: list[FileRun]) -> None:
    """Metadata and warnings of every generated file."""
    _print_failed_blocks(runs)

    for run in runs:
        if run.result is None:
            continue

        if run.result.metadata:
            metadata_table = Table(
                title=f"📊 {run.source}",
                box=box.SIMPLE,
                show_header=True,
                header_style="bold cyan",
            )
            metadata_table.add_column("Property", style="bold")
            metadata_table.add_column("Value", style="green")
            for key, value in run.result.metadata.items():
                metadata_table.add_row(key.replace("_", " ").title(), str(value))
            console.print()
            console.print(metadata_table)

        if run.result.warnings:
            console.print("\n[yellow]⚠️  Warnings:[/yellow]")
            for warning in run.result.warnings:
                console.print(f"  [yellow]•[/yellow] {warning}")


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] api-bindgen [dim]schema.json[/dim] -o [cyan]DIR[/cyan]\n"
            "[bold]Info:[/bold] api-bindgen --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not is_language_supported(language):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Generator Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}
[bold]Templates:[/bold] {', '.join(info['templates'])}"""

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

    config_table.add_row("Package Name", config.package_name)
    config_table.add_row("Add Comments", str(config.add_comments))
    config_table.add_row("Generate Tags", str(config.generate_tags))
    config_table.add_row("Tag Key", config.tag_key)
    config_table.add_row("Host Handle Field", config.host_handle_field or "(embedded)")
    config_table.add_row("Event Literal Mode", config.event_literal_mode)
    for key, value in sorted(config.custom.items()):
        config_table.add_row(key, str(value))

    console.print()
    console.print(config_table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
