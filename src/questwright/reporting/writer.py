"""Writes simulation reports to disk as JSON and plain text."""

import json
import logging
from pathlib import Path

from questwright.models.report import SimulationReport

from .generator import render_text

logger = logging.getLogger(__name__)


class ReportWriter:
    """Writes ``simulation-<suffix>.json`` and ``simulation-<suffix>.txt`` pairs."""

    def __init__(self, output_dir: Path | str | None = None):
        """Initialize the writer.

        Args:
            output_dir: Directory for report files (default: ./simulation-results)
        """
        self.output_dir = Path(output_dir) if output_dir else Path("simulation-results")

    def paths_for(self, suffix: str) -> tuple[Path, Path]:
        stem = f"simulation-{suffix}"
        return self.output_dir / f"{stem}.json", self.output_dir / f"{stem}.txt"

    def write_json(self, report: SimulationReport, suffix: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        json_path, _ = self.paths_for(suffix)
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2)
        return json_path

    def write_text(self, report: SimulationReport, suffix: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        _, txt_path = self.paths_for(suffix)
        with open(txt_path, "w", encoding="utf-8") as f:
            f.write(render_text(report))
        return txt_path

    def write(self, report: SimulationReport, suffix: str) -> tuple[Path, Path]:
        """Write both files for a report.

        Args:
            report: The finished report
            suffix: File name suffix, e.g. the archetype id or dice mode

        Returns:
            (json_path, txt_path)
        """
        json_path = self.write_json(report, suffix)
        txt_path = self.write_text(report, suffix)
        logger.info(f"Report written to {json_path} and {txt_path}")
        return json_path, txt_path
