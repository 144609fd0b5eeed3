"""Shared utilities for date handling and error reporting."""
