#!/usr/bin/env python3
"""Simple CSV Report Generator."""

import csv
from pathlib import Path
from typing import Dict, List, Any, Optional
from ebs_resize.utils.logger import setup_logger


class CSVReportGenerator:
    """Simple CSV report generator."""

    def __init__(self, output_dir: str = "results"):
        """Initialize the CSV report generator."""
        self.output_dir = output_dir
        self.logger = setup_logger(__name__, "report_generator.log")

    def _ensure_output_dir(self, path: Path) -> None:
        """Ensure the output directory exists."""
        path.parent.mkdir(parents=True, exist_ok=True)

    def resolve_path(self, filename: str) -> Path:
        """Absolute or explicitly relative names are used as-is; bare names go to output_dir."""
        if not filename.endswith(".csv"):
            filename = f"{filename}.csv"
        path = Path(filename)
        if path.is_absolute() or path.parent != Path("."):
            return path
        return Path(self.output_dir) / path

    def generate_report(
        self,
        data: List[Dict[str, Any]],
        filename: str,
        fieldnames: Optional[List[str]] = None,
    ) -> Optional[Path]:
        """Generate a CSV report from the provided data.

        Returns:
            Path of the written report, or None when nothing was written
        """
        if not data:
            self.logger.warning("No data provided for report generation")
            return None

        output_path = self.resolve_path(filename)

        # Get fieldnames - use provided order or auto-detect
        if fieldnames is None:
            fieldnames_set = set()
            for item in data:
                fieldnames_set.update(item.keys())
            fieldnames = sorted(fieldnames_set)

        try:
            self._ensure_output_dir(output_path)
            with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=fieldnames, extrasaction="ignore")
                writer.writeheader()
                writer.writerows(data)
        except OSError as e:
            self.logger.error(f"Error generating CSV report {output_path}: {e}")
            return None

        self.logger.info(f"CSV report generated: {output_path} ({len(data)} records)")
        return output_path
