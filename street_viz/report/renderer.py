from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from .. import __version__
from ..core.enums import ReportFormat
from ..core.errors import ReportRenderError
from ..core.logging_config import get_logger
from .assembly import AnalysisReport

logger = get_logger(__name__)

TEMPLATES = {
    ReportFormat.MARKDOWN: "analysis_report.md.j2",
    ReportFormat.HTML: "analysis_report.html.j2",
}

SCENARIO_LABELS = {
    "safety": "Safety",
    "mobility": "Mobility",
    "transit": "Transit",
    "walking": "Walking",
    "cycling": "Cycling",
    "vulnerable_users": "Vulnerable Users",
}


class ReportRenderer:
    """Renders analysis reports using Jinja2 templates."""

    def __init__(
        self, templates_dir: Path | None = None, assets_dir: Path | None = None
    ):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"
        # Escape HTML output only; Markdown embeds SVG markup verbatim
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=lambda name: name is not None and name.endswith(".html.j2"),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.assets_dir = assets_dir

    def render(self, report: AnalysisReport, fmt: ReportFormat | str) -> str:
        fmt = ReportFormat(fmt)
        if fmt is ReportFormat.HTML:
            return self.render_html(report)
        return self.render_markdown(report)

    def render_markdown(self, report: AnalysisReport) -> str:
        """Render a Markdown report.

        ASCII diagrams go into code fences. SVG diagrams are linked to files
        in ``assets_dir`` when it is set and embedded inline otherwise.

        Raises:
            ReportRenderError: If the template is missing or rendering fails
        """
        assets = self.write_assets(report) if self.assets_dir else {}
        return self._render(ReportFormat.MARKDOWN, report, assets=assets)

    def render_html(self, report: AnalysisReport) -> str:
        """Render a standalone HTML report with inline SVG diagrams.

        Raises:
            ReportRenderError: If the template is missing or rendering fails
        """
        if self.assets_dir:
            self.write_assets(report)
        return self._render(ReportFormat.HTML, report, assets={})

    def write_assets(self, report: AnalysisReport) -> dict[str, str]:
        """Write each SVG diagram to ``assets_dir`` as ``<viz id>.svg``.

        Returns:
            Mapping of visualization id to the written file path
        """
        if self.assets_dir is None:
            return {}
        assets_dir = Path(self.assets_dir)
        try:
            assets_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReportRenderError(f"Cannot create assets directory {assets_dir}: {e}") from e

        written = {}
        for item in report.visualizations:
            if not item.visualization.is_svg:
                continue
            path = assets_dir / f"{item.id}.svg"
            try:
                path.write_text(item.visualization.content, encoding="utf-8")
            except OSError as e:
                raise ReportRenderError(f"Cannot write diagram asset {path}: {e}") from e
            written[item.id] = path.as_posix()

        logger.info(
            f"Wrote {len(written)} diagram assets",
            extra={"report_id": report.id, "assets_dir": str(assets_dir)},
        )
        return written

    def _render(
        self, fmt: ReportFormat, report: AnalysisReport, assets: dict[str, str]
    ) -> str:
        name = TEMPLATES[fmt]
        try:
            template = self.env.get_template(name)
            logger.debug(
                f"Rendering {fmt.name.title()} report", extra={"report_id": report.id}
            )
            return template.render(**self._context(report), assets=assets)
        except TemplateNotFound as e:
            logger.error("Report template not found", extra={"error": str(e)})
            raise ReportRenderError(
                f"Report template not found: {e}. "
                f"Ensure street_viz/report/templates/{name} exists."
            ) from e
        except Exception as e:
            logger.error(f"Failed to render {fmt.value} report", extra={"error": str(e)})
            raise ReportRenderError(f"Failed to render {fmt.value} report: {e}") from e

    @staticmethod
    def _context(report: AnalysisReport) -> dict[str, Any]:
        return {
            "report": report,
            "request": report.request,
            "generated_at": report.timestamp.isoformat(timespec="minutes"),
            "scenario_impacts": [
                (SCENARIO_LABELS.get(key, key.replace("_", " ").title()), text)
                for key, text in report.scenario_impacts.items()
            ],
            "version": __version__,
        }


def write_text(path: Path, content: str) -> Path:
    """Write rendered output, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportRenderError(f"Cannot write report to {path}: {e}") from e
    logger.info("Report written", extra={"path": str(path)})
    return path
