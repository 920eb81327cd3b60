"""
Main CLI interface for Fluency-Crew.

This module provides the command-line interface for scoring article
fluency and running article reviews.
"""

import sys
from pathlib import Path

import click
import yaml

from ..config.fluency_config import FluencyConfigLoader
from ..export.formatters import ExportManager
from ..logging.manager import LoggingManager
from ..tools.fluency_analysis import (
    FOCUS_AREAS,
    OPTIMIZATION_LEVELS,
    FluencyOptions,
    analyze_fluency,
)
from ..tools.review_tools import REVIEW_LEVELS, WORKSPACE_FOCUS, review_article
from ..validation.errors import InvalidInputError


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Fluency-Crew: fluency scoring and review tools for technical articles."""
    pass


def _read_content(content: str | None) -> str | None:
    """Resolve CONTENT into article text.

    CONTENT can be text, a file path, or omitted to read from stdin.
    Empty text is valid input. Returns None (after reporting) when there
    is nothing to read or the file cannot be read.
    """
    if content is None:
        if _stdin_is_tty():
            click.echo(
                "❌ No content provided. Pass text, a file path, or pipe content via stdin",
                err=True,
            )
            return None
        text = sys.stdin.read()
        click.echo("📥 Reading content from stdin...", err=True)
    else:
        content_path = Path(content)
        if _is_file(content_path):
            try:
                text = content_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                click.echo(f"❌ Error reading file {content_path}: {e}", err=True)
                return None
            click.echo(f"📁 Reading content from: {content_path}", err=True)
        else:
            text = content

    if not text.strip():
        click.echo("⚠️  Content is empty, reporting zero counts", err=True)
    return text


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def _is_file(path: Path) -> bool:
    # Long inline text can exceed the OS file name limit
    try:
        return path.is_file()
    except OSError:
        return False


def _load_config(config_path: str | None):
    try:
        return FluencyConfigLoader(config_path).load()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        click.echo(f"❌ Error loading config: {e}", err=True)
        return None


def _emit(result, output_format: str, output: str | None, source: str) -> bool:
    """Print the rendered report and save it when requested."""
    manager = ExportManager()
    click.echo(manager.render(result, output_format))

    if output:
        if not manager.export_result(result, Path(output), output_format, source=source):
            click.echo(f"❌ Error saving to {output}", err=True)
            return False
        click.echo(f"💾 Results saved to: {output}", err=True)
    return True


def _preview(text: str) -> str:
    return text[:100] + "..." if len(text) > 100 else text


@cli.command()
@click.argument("content", type=str, required=False)
@click.option(
    "--level",
    "-l",
    default="standard",
    type=click.Choice(list(OPTIMIZATION_LEVELS)),
    help="Optimization level (controls which suggestion buckets are filled)",
)
@click.option("--audience", "-a", default="general", help="Target audience")
@click.option(
    "--focus",
    "-f",
    multiple=True,
    type=click.Choice(list(FOCUS_AREAS)),
    help="Focus areas to prioritize (default: all)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    help="YAML file with threshold overrides (default: $FLUENCY_CREW_CONFIG)",
)
@click.option(
    "--format",
    "output_format",
    default="markdown",
    type=click.Choice(["markdown", "json"]),
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Save the report to a file")
@click.option(
    "--fail-under",
    type=float,
    help="Exit with status 2 when the fluency score is below this value",
)
def analyze(
    content: str | None,
    level: str,
    audience: str,
    focus: tuple,
    config_path: str | None,
    output_format: str,
    output: str | None,
    fail_under: float | None,
) -> None:
    """Score the fluency of an article.

    CONTENT can be text, a file path, or omitted to read from stdin.

    Examples:
      analyze article.md
      analyze article.md --level deep --focus sentence_length
      cat article.md | analyze --format json
    """
    text = _read_content(content)
    if text is None:
        sys.exit(1)

    config = _load_config(config_path)
    if config is None:
        sys.exit(1)

    try:
        options = FluencyOptions(
            optimization_level=level,
            target_audience=audience,
            focus_areas=tuple(focus) if focus else tuple(FOCUS_AREAS),
        )
    except InvalidInputError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    logging_manager = LoggingManager.get_instance()
    session_id = logging_manager.start_session(
        content_info=_preview(text), command="analyze", options=options.to_dict()
    )
    click.echo(f"📝 Started logging session: {session_id}", err=True)

    try:
        report = analyze_fluency(text, options, config)
        logging_manager.log_session_event(
            "Fluency analysis complete",
            {"fluency_score": report.fluency_score, "findings": len(report.findings)},
        )
        saved = _emit(report, output_format, output, source=content or "stdin")
    finally:
        logging_manager.end_session()

    if not saved:
        sys.exit(1)
    if fail_under is not None and report.fluency_score < fail_under:
        click.echo(
            f"⚠️  Fluency score {report.fluency_score:.1f} is below {fail_under:.1f}",
            err=True,
        )
        sys.exit(2)


@cli.command()
@click.argument("content", type=str, required=False)
@click.option(
    "--level",
    "-l",
    default="standard",
    type=click.Choice(list(REVIEW_LEVELS)),
    help="Review level",
)
@click.option(
    "--workspace",
    "-w",
    type=click.Choice(list(WORKSPACE_FOCUS)),
    help="Workspace type, adds workspace-specific guidance",
)
@click.option("--no-fluency", is_flag=True, help="Skip the fluency analysis")
@click.option("--no-ai-tone-filter", is_flag=True, help="Skip the AI-tone scan")
@click.option("--audience", "-a", default="general", help="Target audience")
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    help="YAML file with threshold overrides (default: $FLUENCY_CREW_CONFIG)",
)
@click.option(
    "--format",
    "output_format",
    default="markdown",
    type=click.Choice(["markdown", "json"]),
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Save the review to a file")
def review(
    content: str | None,
    level: str,
    workspace: str | None,
    no_fluency: bool,
    no_ai_tone_filter: bool,
    audience: str,
    config_path: str | None,
    output_format: str,
    output: str | None,
) -> None:
    """Review an article for AI-tone phrasing and fluency.

    CONTENT can be text, a file path, or omitted to read from stdin.
    """
    text = _read_content(content)
    if text is None:
        sys.exit(1)

    config = _load_config(config_path)
    if config is None:
        sys.exit(1)

    logging_manager = LoggingManager.get_instance()
    session_id = logging_manager.start_session(
        content_info=_preview(text),
        command="review",
        options={
            "review_level": level,
            "workspace_type": workspace,
            "enable_fluency_optimization": not no_fluency,
            "use_ai_tone_filter": not no_ai_tone_filter,
        },
    )
    click.echo(f"📝 Started logging session: {session_id}", err=True)

    try:
        result = review_article(
            text,
            review_level=level,
            workspace_type=workspace,
            enable_fluency_optimization=not no_fluency,
            use_ai_tone_filter=not no_ai_tone_filter,
            target_audience=audience,
            config=config,
        )
        logging_manager.log_session_event(
            "Article review complete", {"passed": result.passed}
        )
        saved = _emit(result, output_format, output, source=content or "stdin")
    finally:
        logging_manager.end_session()

    if not saved:
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    help="YAML file with threshold overrides (default: $FLUENCY_CREW_CONFIG)",
)
def config(config_path: str | None) -> None:
    """Show the effective fluency thresholds and where they come from."""
    loader = FluencyConfigLoader(config_path)
    info = loader.get_config_info()

    effective = _load_config(config_path)
    if effective is None:
        sys.exit(1)

    click.echo("📊 Fluency-Crew Configuration")
    click.echo("=" * 30)
    if info["is_default"]:
        click.echo("Source: built-in defaults")
    else:
        source = " (from env var)" if info["is_using_env_var"] and not config_path else ""
        click.echo(f"Source: {info['config_path']}{source}")

    for key, value in effective.to_dict().items():
        click.echo(f"  {key}: {value}")

    if info["is_default"]:
        click.echo(
            "\n💡 Tip: set FLUENCY_CREW_CONFIG or pass --config to override thresholds"
        )


if __name__ == "__main__":
    cli()
