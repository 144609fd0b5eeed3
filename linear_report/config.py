"""Configuration for Linear report generation."""

import os
from typing import Optional


class LinearConfig:
    """Configuration class for Linear API access."""

    def __init__(self) -> None:
        """Initialize Linear configuration from environment variables."""
        self.api_key: Optional[str] = (os.getenv("LINEAR_API_KEY") or "").strip() or None
        self.assignee_email: Optional[str] = (
            os.getenv("LINEAR_ASSIGNEE_EMAIL") or ""
        ).strip() or None

    def is_configured(self) -> bool:
        """Check if Linear is properly configured."""
        return self.api_key is not None

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.api_key:
            raise ValueError(
                "Linear API key is required. Set LINEAR_API_KEY environment variable."
            )
