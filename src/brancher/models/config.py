"""Configuration model for Brancher.

BrancherConfig holds per-handle settings. The CLI fills it from
command-line options and their environment variables.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, field_validator


class BrancherConfig(BaseModel):
    """Per-handle configuration."""

    search_parent_directories: bool = True
    # Write the previous tree back when HEAD cannot be moved after checkout.
    restore_tree_on_head_failure: bool = False
    # Only read by the CLI logging setup; the library never configures handlers.
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level
