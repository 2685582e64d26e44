"""Utility helpers shared by the docxcompare reviewers and CLI."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from docxcompare.utils.decorators import debug_timer, requires_dependencies
from docxcompare.utils.packages import check_version_requirement, get_package_version

__all__ = [
    "check_version_requirement",
    "debug_timer",
    "get_package_version",
    "requires_dependencies",
]
