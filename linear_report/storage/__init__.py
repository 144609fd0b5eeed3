"""Report output storage."""

from .manager import DEFAULT_OUTPUT_DIR, OutputPaths, ReportWriter, build_output_paths

__all__ = ["DEFAULT_OUTPUT_DIR", "OutputPaths", "ReportWriter", "build_output_paths"]
