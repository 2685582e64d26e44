"""Pytest configuration and shared fixtures for the docxcompare test suite."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from docxcompare.review import ReviewOutcome

# Hypothesis profiles, selected with HYPOTHESIS_PROFILE
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@dataclass
class FixedReviewer:
    """Semantic reviewer double that always reports the same outcome."""

    revision_count: int = 0
    artifact: Path | None = None
    calls: list[tuple[str, str]] = field(default_factory=list)

    def review_semantically(self, expected_path: str | os.PathLike[str], actual_path: str | os.PathLike[str]):
        self.calls.append((str(expected_path), str(actual_path)))
        return ReviewOutcome(self.revision_count, self.artifact if self.revision_count else None)


@pytest.fixture
def fixed_reviewer() -> type[FixedReviewer]:
    """Provide the FixedReviewer class for building reviewer doubles."""
    return FixedReviewer


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove DOCXCOMPARE_* variables so the host environment cannot leak in."""
    for key in list(os.environ):
        if key.startswith("DOCXCOMPARE_"):
            monkeypatch.delenv(key)
