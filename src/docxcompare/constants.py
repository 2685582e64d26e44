#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants shared across docxcompare modules."""

from __future__ import annotations

from typing import Literal

# Stream comparison
DEFAULT_CHUNK_SIZE = 4096

# Semantic review
DIFF_ARTIFACT_SUFFIX = ".diff.docx"
REVIEW_AUTHOR = "Comparison"

ReviewerName = Literal["auto", "word", "text"]
REVIEWER_NAMES: tuple[str, ...] = ("auto", "word", "text")
DEFAULT_REVIEWER: ReviewerName = "auto"

# Logging
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "WARNING"

# Configuration
ENV_PREFIX = "DOCXCOMPARE_"
CONFIG_ENV_VAR = "DOCXCOMPARE_CONFIG"
CONFIG_FILENAMES = [".docxcompare.toml", ".docxcompare.yaml", ".docxcompare.yml", ".docxcompare.json"]
PYPROJECT_SECTION = "docxcompare"
CONFIG_KEYS = frozenset(
    {
        "semantic_review",
        "reviewer",
        "replace_expected",
        "chunk_size",
        "log_level",
        "log_file",
        "trace",
        "rich",
    }
)

# CLI exit codes
EXIT_SUCCESS = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2
EXIT_DEPENDENCY_ERROR = 3
EXIT_VALIDATION_ERROR = 4
EXIT_FILE_ERROR = 5
EXIT_ARCHIVE_ERROR = 6
EXIT_EXTERNAL_TOOL_ERROR = 7
