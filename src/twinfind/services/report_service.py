"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Renders duplicate groups and run metrics as plain text, CSV or JSON,
and writes the result to a file or to standard output.
The engine knows nothing about this module.
"""
import csv
import io
import json
import sys
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO

from twinfind.core.models import DuplicateGroup, RunMetrics
from twinfind.utils.convert_utils import ConvertUtils


class OutputFormat(Enum):
    TXT = "txt"
    CSV = "csv"
    JSON = "json"


class ReportService:
    @staticmethod
    def render(groups: List[DuplicateGroup], metrics: RunMetrics, fmt: OutputFormat) -> str:
        """Returns the complete report as a string."""
        renderers = {
            OutputFormat.TXT: ReportService._render_txt,
            OutputFormat.CSV: ReportService._render_csv,
            OutputFormat.JSON: ReportService._render_json,
        }
        try:
            renderer = renderers[OutputFormat(fmt)]
        except (KeyError, ValueError):
            raise ValueError(f"Unsupported output format: {fmt!r}")
        return renderer(groups, metrics)

    @staticmethod
    def write(
            groups: List[DuplicateGroup],
            metrics: RunMetrics,
            fmt: OutputFormat,
            output_path: Optional[str] = None,
            stream: Optional[TextIO] = None
    ) -> None:
        """
        Writes the report to `output_path`, or to `stream` (stdout by default).
        Raises:
            OSError: If the output file cannot be written
        """
        report = ReportService.render(groups, metrics, fmt)
        if output_path:
            Path(output_path).write_text(report, encoding="utf-8", newline="")
        else:
            (stream or sys.stdout).write(report)

    @staticmethod
    def _render_txt(groups: List[DuplicateGroup], metrics: RunMetrics) -> str:
        lines = []
        if not groups:
            lines.append("No duplicate files found.")
        for idx, group in enumerate(groups, 1):
            size_str = ConvertUtils.bytes_to_human(group.size)
            lines.append("")
            lines.append(f"Group {idx} | Size: {size_str} | Files: {len(group.files)}")
            for path in group.paths:
                lines.append(f"  - {path}")

        lines.append("")
        lines.append("=== Metrics ===")
        for name, value in metrics.to_dict().items():
            lines.append(f"{name}: {ConvertUtils.metric_to_str(value)}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _render_csv(groups: List[DuplicateGroup], metrics: RunMetrics) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["group", "path"])
        for idx, group in enumerate(groups, 1):
            for path in group.paths:
                writer.writerow([idx, path])

        writer.writerow([])
        writer.writerow(["metric", "value"])
        for name, value in metrics.to_dict().items():
            writer.writerow([name, ConvertUtils.metric_to_str(value)])
        return buffer.getvalue()

    @staticmethod
    def _render_json(groups: List[DuplicateGroup], metrics: RunMetrics) -> str:
        payload = {
            "metrics": metrics.to_dict(),
            "groups": [
                {"group": idx, "size": group.size, "files": group.paths}
                for idx, group in enumerate(groups, 1)
            ],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
