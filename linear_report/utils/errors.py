"""Error message helpers that never expose credentials."""

import re

SECRET_PATTERNS = [
    re.compile(r"lin_api_[a-zA-Z0-9]+", re.IGNORECASE),
    re.compile(r"ghp_[a-zA-Z0-9]+", re.IGNORECASE),
    re.compile(r"gho_[a-zA-Z0-9]+", re.IGNORECASE),
    # long hex strings (tokens)
    re.compile(r"[a-f0-9]{32,}", re.IGNORECASE),
]

REDACTED = "[REDACTED]"


def sanitize_error_message(message: str) -> str:
    """Remove API keys and tokens from an error message.

    Example:
        >>> sanitize_error_message("Error: lin_api_abc123xyz")
        'Error: [REDACTED]'
    """
    sanitized = message
    for pattern in SECRET_PATTERNS:
        sanitized = pattern.sub(REDACTED, sanitized)
    return sanitized


def to_user_friendly_error(error: BaseException | str) -> str:
    """Convert an exception (or any value) to a sanitized message."""
    return sanitize_error_message(str(error))


def validate_output_dir(output_dir: str) -> None:
    """Validate an output directory path.

    Absolute and relative paths are both accepted, but no path may climb out
    through a parent reference.

    Raises:
        ValueError: If the path contains ``..``
    """
    normalized = output_dir.replace("\\", "/")
    if ".." in normalized:
        raise ValueError('Output directory cannot contain ".." (path traversal)')
