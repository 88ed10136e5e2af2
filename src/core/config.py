"""Runtime configuration model for Keeplog.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_DATA_ROOT, DEFAULT_JSON_INDENT, LOG_FILE_SUFFIX
from core.errors import KeeplogConfigError


@dataclass(frozen=True)
class KeeplogConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory holding persistent log files.
        json_indent: Indentation used when writing log files.
    """

    data_root: Path
    json_indent: int

    @classmethod
    def from_env(cls) -> "KeeplogConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            KeeplogConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("KEEPLOG_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        json_indent_value = os.getenv("KEEPLOG_JSON_INDENT", str(DEFAULT_JSON_INDENT))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            json_indent=_parse_json_indent(json_indent_value),
        )

    def log_path(self, log_name: str) -> Path:
        """Resolve the file path for a named log under the data root."""
        return self.data_root / f"{log_name}{LOG_FILE_SUFFIX}"


def _parse_json_indent(raw_value: str) -> int:
    """Parse the JSON indent environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed non-negative indent.

    Raises:
        KeeplogConfigError: If value is not a non-negative integer.
    """
    try:
        indent = int(raw_value)
    except ValueError as error:
        raise KeeplogConfigError(
            "Invalid KEEPLOG_JSON_INDENT value: "
            f"expected integer, got '{raw_value}'. "
            "Set KEEPLOG_JSON_INDENT to a numeric value."
        ) from error
    if indent < 0:
        raise KeeplogConfigError(
            f"Invalid KEEPLOG_JSON_INDENT value: {indent}. "
            "Set KEEPLOG_JSON_INDENT to zero or a positive number."
        )
    return indent
