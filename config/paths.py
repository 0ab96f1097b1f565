"""Centralized file path configuration.

All file paths used by livefeed are defined here for easy maintenance
and testing.
"""

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# Optional environment overrides
ENV_FILE = PROJECT_ROOT / ".env"

# Default log file for the CLI's JSON log handler
LOG_FILE = PROJECT_ROOT / "livefeed.log"
