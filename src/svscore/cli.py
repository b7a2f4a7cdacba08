"""svscore: score structural variants in an annotated VCF."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from . import __version__
from .annotator import annotate_vcf
from .config import AnnotateConfig, ConfigValidationError, load_config, validate_config
from .errors import SVScoreError


def version_callback(value: bool) -> None:
    if value:
        print(f"SVScore version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="svscore", help="Score structural variants in a VCF using per-base pathogenicity scores"
)
# stdout carries the VCF; diagnostics go to stderr
console = Console(stderr=True)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool, log_file: Path | None = None) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("svscore").setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logging.getLogger("svscore").addHandler(file_handler)


def build_config(config_file: Path | None, overrides: dict[str, Any]) -> AnnotateConfig:
    """Merge CLI options over the config file (if any) and defaults."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if config_file:
        return load_config(config_file, overrides)
    validate_config(overrides)
    return AnnotateConfig(**overrides)


@app.command()
def annotate(
    vcf_path: Path = typer.Argument(..., help="Annotated SV VCF file (.vcf, .vcf.gz)"),
    gene_file: Annotated[
        Path | None, typer.Option("--genes", "-g", help="Gene coordinate table (BED-like)")
    ] = None,
    score_file: Annotated[
        Path | None,
        typer.Option("--scores", "-c", help="Tabix-indexed per-base score file"),
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", help="TOML configuration file")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write VCF here instead of stdout")
    ] = None,
    score_column: Annotated[
        int | None, typer.Option("--score-column", help="0-based score column in the score file")
    ] = None,
    cache: Annotated[
        bool | None,
        typer.Option("--cache/--no-cache", help="Reuse results of repeated interval queries"),
    ] = None,
    emit_span: Annotated[
        bool | None,
        typer.Option(
            "--emit-span/--no-emit-span",
            help="Also write symbolic SVSCORE_SPAN values for INV, BND and INS",
        ),
    ] = None,
    log_file: Annotated[Path | None, typer.Option("--log", help="Write log to file")] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Append SVSCORE_* fields to every variant of an annotated VCF.

    Header lines are copied unchanged. Data lines are written once all
    variants are scored, sorted by chromosome name and position.
    """
    setup_logging(verbose, quiet, log_file)

    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    overrides = {
        "gene_file": gene_file,
        "score_file": score_file,
        "score_column": score_column,
        "cache_queries": cache,
        "emit_symbolic_span": emit_span,
    }
    try:
        config = build_config(config_file, overrides)
    except (ConfigValidationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration Error: {e}[/red]")
        raise typer.Exit(1) from None

    if not (verbose or quiet):
        logging.getLogger("svscore").setLevel(config.log_level)

    try:
        if output:
            with open(output, "w") as out:
                summary = annotate_vcf(config, vcf_path, out)
        else:
            summary = annotate_vcf(config, vcf_path, sys.stdout)
    except (SVScoreError, ConfigValidationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if not quiet:
        console.print(
            f"[green]✓[/green] Scored {summary.variants_read:,} variants "
            f"({summary.lines_written:,} lines written)"
        )
        if summary.unpaired_breakends:
            console.print(f"  Unpaired breakends dropped: {summary.unpaired_breakends:,}")


@app.command()
def doctor(
    score_file: Annotated[
        Path | None,
        typer.Option("--scores", "-c", help="Tabix-indexed per-base score file"),
    ] = None,
    gene_file: Annotated[
        Path | None, typer.Option("--genes", "-g", help="Gene coordinate table")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", help="TOML configuration file")
    ] = None,
) -> None:
    """Check dependencies and that the score file and gene table are usable."""
    from .doctor import DependencyChecker

    try:
        config = build_config(config_file, {"score_file": score_file, "gene_file": gene_file})
    except (ConfigValidationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration Error: {e}[/red]")
        raise typer.Exit(1) from None

    try:
        resolved_score_file = config.resolve_score_file()
    except ConfigValidationError:
        resolved_score_file = None

    console.print("\n[bold]svscore System Check[/bold]")
    console.print("─" * 30)

    checker = DependencyChecker(score_file=resolved_score_file, gene_file=config.gene_file)
    results = checker.check_all()

    all_passed = True
    for result in results:
        if result.passed:
            version_str = f" ({result.version})" if result.version else ""
            console.print(f"[green]✓[/green] {result.name}{version_str}")
        else:
            all_passed = False
            console.print(f"[red]✗[/red] {result.name}")
            if result.message:
                console.print(f"    {result.message}")

    console.print()

    if all_passed:
        console.print("[green]All checks passed.[/green]")
    else:
        console.print("[red]Some checks failed.[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
