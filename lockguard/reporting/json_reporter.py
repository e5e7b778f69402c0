"""
LockGuard JSON Reporter

Generates machine-readable JSON output format:
{
    "root": "/abs/path",
    "results": [{"lockFile": ..., "packages": [...]}],
    "anyAffected": bool,
    "anyWarnings": bool,
    "summary": {
        "totalLockfiles": N,
        "totalPackages": N,
        "totalWarnings": N,
        "totalCompromised": N
    }
}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from lockguard.core.models import ScanReport


class JSONReporter:
    """Generates JSON-formatted scan reports."""

    def __init__(self, report: ScanReport) -> None:
        self.report = report

    def render(self) -> str:
        return json.dumps(self.report.to_dict(), indent=2)

    def write(self, output_file: str, json_str: Optional[str] = None) -> str:
        """
        Write the JSON report to a file.

        Args:
            output_file: File path to write the report to.
            json_str: Already-rendered JSON, if available.

        Returns:
            The JSON string.
        """
        json_str = json_str or self.render()
        Path(output_file).write_text(json_str, encoding="utf-8")
        return json_str
