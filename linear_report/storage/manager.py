"""Output layout and writing of generated reports."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console

from ..utils.date_parser import (
    format_human_readable_timestamp,
    format_month_directory,
    format_timestamp,
)

console = Console()

DEFAULT_OUTPUT_DIR = "./generated"


class OutputPaths(BaseModel):
    """Where one run's reports are written.

    Layout: ``{output_dir}/{MM. Month}/{YYYY-MM-DD HH:MM}/{stamp}_{kind}.txt``
    """

    output_dir: str = Field(..., description="Root output directory")
    month_dir: str = Field(..., description="Month directory name, e.g. '01. January'")
    timestamp_dir: str = Field(..., description="Run directory, e.g. '2026-02-04 14:30'")
    technical_path: Path = Field(..., description="Technical report file")
    non_technical_path: Path = Field(..., description="Plain-language report file")
    ai_summary_path: Path = Field(..., description="AI summary report file")


def build_output_paths(
    year: int,
    month: int,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    now: datetime | None = None,
) -> OutputPaths:
    """Build output paths for one report run.

    Args:
        year: Report year
        month: Report month (1-12)
        output_dir: Root output directory
        now: Run time used for directory and file stamps (defaults to now)

    Returns:
        OutputPaths for the technical, non-technical and AI summary reports
    """
    now = now or datetime.now()
    month_dir = format_month_directory(year, month)
    timestamp_dir = format_human_readable_timestamp(now)
    timestamp = format_timestamp(now)

    base_path = Path(output_dir) / month_dir / timestamp_dir
    return OutputPaths(
        output_dir=output_dir,
        month_dir=month_dir,
        timestamp_dir=timestamp_dir,
        technical_path=base_path / f"{timestamp}_technical.txt",
        non_technical_path=base_path / f"{timestamp}_non_technical.txt",
        ai_summary_path=base_path / f"{timestamp}_ai_summary.txt",
    )


class ReportWriter:
    """Writes generated report text to disk."""

    def __init__(self, output_dir: str = DEFAULT_OUTPUT_DIR):
        """Initialize report writer.

        Args:
            output_dir: Root directory for report output
        """
        self.output_dir = output_dir

    def build_paths(
        self, year: int, month: int, now: datetime | None = None
    ) -> OutputPaths:
        """Build output paths under this writer's directory."""
        return build_output_paths(year, month, self.output_dir, now)

    def write_report_file(self, file_path: Path, content: str) -> Path:
        """Create the parent directory if needed and write a UTF-8 file.

        Args:
            file_path: Destination file
            content: Report text

        Returns:
            Path to the written file
        """
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(content)
            return file_path

        except OSError as e:
            console.print(f"Error writing report {file_path}: {e}")
            raise

    def write_reports(
        self,
        paths: OutputPaths,
        technical_content: str,
        non_technical_content: str,
        ai_summary_content: str | None = None,
    ) -> list[Path]:
        """Write the technical and non-technical reports, plus the AI summary if given.

        Returns:
            Paths of the written files
        """
        written = [
            self.write_report_file(paths.technical_path, technical_content),
            self.write_report_file(paths.non_technical_path, non_technical_content),
        ]
        if ai_summary_content is not None:
            written.append(
                self.write_report_file(paths.ai_summary_path, ai_summary_content)
            )
        return written
