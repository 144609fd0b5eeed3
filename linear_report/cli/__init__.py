"""Command line interface for linear-report."""
