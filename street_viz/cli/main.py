from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import typer
import yaml

from .. import __version__
from ..core.config import get_settings
from ..core.enums import ReportFormat, VisualizationType
from ..core.errors import InvalidParameter, StreetVizError
from ..core.logging_config import get_logger, setup_logging
from ..core.models import VisualizationRequest
from ..diagrams import generate_visualization
from ..diagrams.params import PARAMS_BY_TYPE, describe_fields
from ..intake import classify_paragraphs, extract_text
from ..report import ReportBuilder, ReportRenderer, load_plan, load_request, write_text
from . import output as cli_output

app = typer.Typer(help="StreetViz CLI")
diagram_app = typer.Typer(help="Diagram generation commands")
report_app = typer.Typer(help="Analysis report commands")
intake_app = typer.Typer(help="Document intake commands")

logger = get_logger(__name__)


@app.callback()
def callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure global CLI options."""
    settings = get_settings()
    setup_logging(json_output=json_logs, log_level=log_level, log_dir=settings.log_dir)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` pairs.

    Bracketed values are read as YAML flow lists, so ``values=[65, 58]`` yields
    a list. Anything else stays a string and is coerced by the diagram record.
    """
    parsed: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise InvalidParameter(f"Expected key=value, got {item!r}")
        raw = raw.strip()
        if raw.startswith("["):
            try:
                parsed[key] = yaml.safe_load(raw)
            except yaml.YAMLError as e:
                raise InvalidParameter(f"Cannot read list for {key}: {e}") from None
        else:
            parsed[key] = raw
    return parsed


def _load_data_file(path: Path) -> dict[str, Any]:
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InvalidParameter(f"Data file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidParameter(f"Cannot read data file {path}: {e}") from None
    except yaml.YAMLError as e:
        raise InvalidParameter(f"Invalid YAML in data file: {e}") from None
    if content is None:
        return {}
    if not isinstance(content, Mapping):
        raise InvalidParameter(f"Data file {path} must contain a mapping")
    return dict(content)


@diagram_app.command("types")
def diagram_types() -> None:
    """List the diagram types and the data keys each one accepts."""
    for tag in VisualizationType:
        cli_output.plain(tag.value, color=cli_output.OutputColor.CYAN)
        for f in describe_fields(PARAMS_BY_TYPE[tag]):
            unit = f" [{f['unit']}]" if f["unit"] else ""
            cli_output.plain(f"  {f['key']}{unit} (default: {f['default']})")


@diagram_app.command("render")
def diagram_render(
    diagram_type: str = typer.Argument(..., metavar="TYPE", help="Diagram type, e.g. before-after"),
    data: Path | None = typer.Option(None, "--data", help="YAML or JSON file with diagram data"),
    assignments: list[str] | None = typer.Option(
        None, "--set", help="Override a data key, e.g. --set beforeSpeed=40 (repeatable)"
    ),
    description: str = typer.Option("", help="Free-text description stored with the diagram"),
    output: Path | None = typer.Option(None, help="Write the diagram to this file instead of stdout"),
    caption: bool = typer.Option(True, "--caption/--no-caption", help="Print the generated caption"),
) -> None:
    """Render a single diagram from data defaults, a data file and --set overrides."""
    try:
        values = _load_data_file(data) if data else {}
        values.update(parse_assignments(assignments or []))
        visualization = generate_visualization(
            VisualizationRequest(type=diagram_type, data=values, description=description)
        )
    except StreetVizError as e:
        logger.error("Diagram render failed", extra={"type": diagram_type, "error": str(e)})
        cli_output.error(str(e))
        raise typer.Exit(code=1) from None

    logger.info(
        "Rendered diagram",
        extra={"type": visualization.type.value, "output": str(output) if output else None},
    )

    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(visualization.content, encoding="utf-8")
        except OSError as e:
            cli_output.error(f"Cannot write {output}: {e}")
            raise typer.Exit(code=1) from None
        cli_output.success(f"Diagram written to {output}")
    else:
        typer.echo(visualization.content.rstrip("\n"))

    for row, count in visualization.overflow.items():
        if count:
            cli_output.warning(f"{row}: {count} icons beyond the display limit")
    if caption:
        cli_output.info(visualization.caption)


@report_app.command("build")
def report_build(
    request: Path = typer.Option(..., "--request", help="YAML file with cityContext, data, scenario and task"),
    plan: Path | None = typer.Option(None, help="Optional YAML diagram plan replacing the default set"),
    format: ReportFormat | None = typer.Option(  # noqa: B008
        None, case_sensitive=False, help="Output format: md or html (default from SVZ_REPORT_FORMAT)"
    ),
    output: Path | None = typer.Option(None, help="Output path (default: <output dir>/<report id>.<format>)"),
    assets_dir: Path | None = typer.Option(None, help="Directory to write each SVG diagram to"),
    report_id: str | None = typer.Option(None, help="Report id (default: report-<timestamp>)"),
) -> None:
    """Build an analysis report with the standard diagram set."""
    settings = get_settings()
    fmt = format or settings.report_format
    timestamp = datetime.now(UTC)
    report_id = report_id or f"report-{timestamp:%Y%m%d%H%M%S}"
    output = output or settings.output_dir / f"{report_id}.{fmt.value}"
    assets_dir = assets_dir or settings.assets_dir

    logger.info(
        "Building report",
        extra={"report_id": report_id, "request": str(request), "plan": str(plan) if plan else None},
    )

    try:
        analysis_request = load_request(request)
        builder = ReportBuilder(load_plan(plan) if plan else None)
        report = builder.build(analysis_request, report_id=report_id, timestamp=timestamp)
        renderer = ReportRenderer(assets_dir=assets_dir)
        write_text(output, renderer.render(report, fmt))
    except StreetVizError as e:
        logger.error("Report build failed", extra={"report_id": report_id, "error": str(e)})
        cli_output.error(f"Report build failed: {e}")
        raise typer.Exit(code=1) from None

    for tag, message in report.failures:
        cli_output.warning(f"Skipped {tag} diagram: {message}")
    cli_output.success(f"{fmt.name.title()} report written to {output}")
    cli_output.plain(f"  Diagrams: {len(report.visualizations)}")
    if assets_dir:
        cli_output.plain(f"  Assets: {assets_dir}")


@intake_app.command("extract")
def intake_extract(
    document: Path = typer.Argument(..., help="Document to read (.txt, .pdf or .docx)"),
    output: Path | None = typer.Option(None, help="Write the request YAML to this file"),
) -> None:
    """Extract a draft analysis request from a document."""
    try:
        text = extract_text(document)
    except StreetVizError as e:
        logger.error("Document extraction failed", extra={"path": str(document), "error": str(e)})
        cli_output.error(str(e))
        raise typer.Exit(code=1) from None

    fields = classify_paragraphs(text).to_dict()
    content = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True, width=100)

    if output:
        try:
            write_text(output, content)
        except StreetVizError as e:
            cli_output.error(str(e))
            raise typer.Exit(code=1) from None
        cli_output.success(f"Request written to {output}")
    else:
        typer.echo(content.rstrip("\n"))

    missing = [name for name in ("city_context", "data", "scenario", "task") if name not in fields]
    if missing:
        cli_output.warning(f"Fill in before building a report: {', '.join(missing)}")


app.add_typer(diagram_app, name="diagram")
app.add_typer(report_app, name="report")
app.add_typer(intake_app, name="intake")
