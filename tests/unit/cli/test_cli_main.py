"""Tests for the docxcompare command line."""

import logging

import pytest
from utils import patch_central_directory, write_zip

from docxcompare import cli
from docxcompare.cli import create_parser, get_exit_code_for_exception, main
from docxcompare.exceptions import (
    ArchiveFormatError,
    DependencyError,
    DocxCompareError,
    ExternalToolError,
    FileAccessError,
    NotFoundError,
    ValidationError,
)

ENTRIES = {"word/document.xml": "<w:document>Hello</w:document>", "docProps/core.xml": "<core/>"}


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo the handler changes main() makes to the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def no_config(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda config_path=None, no_config=False: {})


@pytest.fixture
def documents(tmp_path):
    expected = write_zip(tmp_path / "expected.docx", ENTRIES)
    actual = write_zip(tmp_path / "actual.docx", {**ENTRIES, "word/document.xml": "<w:document>Hullo</w:document>"})
    return expected, actual


@pytest.mark.unit
@pytest.mark.cli
class TestParser:
    """Tests for option parsing and defaults."""

    def test_defaults(self):
        args = create_parser().parse_args(["e.docx", "a.docx"])
        assert args.expected == "e.docx"
        assert args.actual == "a.docx"
        assert args.semantic_review is False
        assert args.reviewer == "auto"
        assert args.replace_expected is True
        assert args.chunk_size == 4096
        assert args.log_level == "WARNING"
        assert args.list_discrepancies is False

    def test_word_diff_alias(self):
        args = create_parser().parse_args(["--word-diff", "e.docx", "a.docx"])
        assert args.semantic_review is True

    def test_no_replace(self):
        args = create_parser().parse_args(["--no-replace", "e.docx", "a.docx"])
        assert args.replace_expected is False

    def test_environment_defaults(self, monkeypatch):
        monkeypatch.setenv("DOCXCOMPARE_SEMANTIC_REVIEW", "true")
        monkeypatch.setenv("DOCXCOMPARE_REVIEWER", "text")
        monkeypatch.setenv("DOCXCOMPARE_CHUNK_SIZE", "512")
        monkeypatch.setenv("DOCXCOMPARE_REPLACE_EXPECTED", "false")
        args = create_parser().parse_args(["e.docx", "a.docx"])
        assert args.semantic_review is True
        assert args.reviewer == "text"
        assert args.chunk_size == 512
        assert args.replace_expected is False

    def test_invalid_environment_value_ignored(self, monkeypatch):
        monkeypatch.setenv("DOCXCOMPARE_CHUNK_SIZE", "0")
        monkeypatch.setenv("DOCXCOMPARE_REVIEWER", "libreoffice")
        args = create_parser().parse_args(["e.docx", "a.docx"])
        assert args.chunk_size == 4096
        assert args.reviewer == "auto"

    def test_log_level_case_insensitive(self, monkeypatch):
        assert create_parser().parse_args(["--log-level", "debug", "e.docx", "a.docx"]).log_level == "DEBUG"
        monkeypatch.setenv("DOCXCOMPARE_LOG_LEVEL", "info")
        assert create_parser().parse_args(["e.docx", "a.docx"]).log_level == "INFO"

    def test_cli_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("DOCXCOMPARE_REVIEWER", "text")
        args = create_parser().parse_args(["--reviewer", "word", "e.docx", "a.docx"])
        assert args.reviewer == "word"


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Tests for get_exit_code_for_exception()."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (DependencyError("word", [("pywin32", "")]), 3),
            (ImportError("no module"), 3),
            (ExternalToolError("Word failed", tool_name="word"), 7),
            (ArchiveFormatError("not a zip"), 6),
            (NotFoundError("missing.docx"), 5),
            (FileAccessError("locked.docx"), 5),
            (ValidationError("bad option"), 4),
            (DocxCompareError("other"), 2),
            (RuntimeError("boom"), 2),
        ],
    )
    def test_mapping(self, error, code):
        assert get_exit_code_for_exception(error) == code


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for main() end to end on small zip containers."""

    def test_identical(self, tmp_path, no_config, capsys):
        expected = write_zip(tmp_path / "expected.docx", ENTRIES)
        actual = write_zip(tmp_path / "actual.docx", ENTRIES)

        assert main([str(expected), str(actual)]) == 0
        assert capsys.readouterr().out == "Document content is identical\n"

    def test_different(self, documents, no_config, capsys):
        expected, actual = documents
        assert main([str(expected), str(actual)]) == 1
        assert capsys.readouterr().out == "Document content does not match\n"

    def test_list_discrepancies(self, documents, no_config, capsys):
        expected, actual = documents
        assert main(["--list-discrepancies", str(expected), str(actual)]) == 1
        out = capsys.readouterr().out
        assert "  word/document.xml: Content differs" in out

    def test_equivalent_replaces_expected(self, documents, no_config, monkeypatch, capsys, fixed_reviewer):
        expected, actual = documents
        reviewer = fixed_reviewer(0)
        monkeypatch.setattr(cli, "get_reviewer", lambda name: reviewer)

        assert main(["--semantic-review", str(expected), str(actual)]) == 0
        assert "replacing expected by actual" in capsys.readouterr().out
        assert expected.read_bytes() == actual.read_bytes()
        assert reviewer.calls == [(str(expected), str(actual))]

    def test_equivalent_with_no_replace(self, documents, no_config, monkeypatch, capsys, fixed_reviewer):
        expected, actual = documents
        original = expected.read_bytes()
        monkeypatch.setattr(cli, "get_reviewer", lambda name: fixed_reviewer(0))

        assert main(["--semantic-review", "--no-replace", str(expected), str(actual)]) == 0
        assert "keeping expected" in capsys.readouterr().out
        assert expected.read_bytes() == original

    def test_reviewer_finds_revisions(self, documents, tmp_path, no_config, monkeypatch, capsys, fixed_reviewer):
        expected, actual = documents
        artifact = tmp_path / "actual.diff.docx"
        monkeypatch.setattr(cli, "get_reviewer", lambda name: fixed_reviewer(2, artifact))

        assert main(["--semantic-review", str(expected), str(actual)]) == 1
        out = capsys.readouterr().out
        assert "Document content does not match\n" in out
        assert f"Differences between documents are stored as: {artifact}" in out

    def test_reviewer_name_forwarded(self, documents, no_config, monkeypatch, fixed_reviewer):
        expected, actual = documents
        requested = []

        def fake_get_reviewer(name):
            requested.append(name)
            return fixed_reviewer(0)

        monkeypatch.setattr(cli, "get_reviewer", fake_get_reviewer)
        main(["--semantic-review", "--reviewer", "text", "--no-replace", str(expected), str(actual)])
        assert requested == ["text"]

    def test_missing_file(self, tmp_path, no_config, capsys):
        expected = write_zip(tmp_path / "expected.docx", ENTRIES)
        assert main([str(expected), str(tmp_path / "missing.docx")]) == 5
        assert "Error comparing documents" in capsys.readouterr().err

    def test_not_a_zip(self, tmp_path, no_config, capsys):
        expected = write_zip(tmp_path / "expected.docx", ENTRIES)
        actual = tmp_path / "actual.docx"
        actual.write_bytes(b"plain text, not a package")
        assert main([str(expected), str(actual)]) == 6

    def test_encrypted_entry(self, tmp_path, no_config, capsys):
        expected = write_zip(tmp_path / "expected.docx", ENTRIES)
        actual = patch_central_directory(
            write_zip(tmp_path / "actual.docx", ENTRIES), "word/document.xml", flag_bits=0x1
        )
        assert main([str(expected), str(actual)]) == 6
        assert "password required" in capsys.readouterr().err

    def test_reviewer_failure(self, documents, no_config, monkeypatch, capsys):
        expected, actual = documents

        class BrokenReviewer:
            def review_semantically(self, expected_path, actual_path):
                raise ExternalToolError("Word is not installed", tool_name="word")

        monkeypatch.setattr(cli, "get_reviewer", lambda name: BrokenReviewer())
        assert main(["--semantic-review", str(expected), str(actual)]) == 7
        assert "Word is not installed" in capsys.readouterr().err

    def test_help(self, no_config, capsys):
        assert main(["--help"]) == 0
        assert "docxcompare" in capsys.readouterr().out

    def test_missing_arguments(self, no_config, capsys):
        assert main(["only-one.docx"]) == 4

    def test_invalid_chunk_size(self, documents, no_config, capsys):
        expected, actual = documents
        assert main(["--chunk-size", "0", str(expected), str(actual)]) == 4


@pytest.mark.unit
@pytest.mark.cli
class TestConfigIntegration:
    """Tests for configuration files feeding CLI defaults."""

    def test_config_enables_semantic_review(self, documents, tmp_path, monkeypatch, capsys, fixed_reviewer):
        expected, actual = documents
        config = tmp_path / "settings.toml"
        config.write_text("semantic_review = true\nreplace_expected = false\n", encoding="utf-8")
        monkeypatch.setattr(cli, "get_reviewer", lambda name: fixed_reviewer(0))

        assert main(["--config", str(config), str(expected), str(actual)]) == 0
        assert "keeping expected" in capsys.readouterr().out

    def test_environment_beats_config(self, documents, tmp_path, monkeypatch, capsys):
        expected, actual = documents
        config = tmp_path / "settings.toml"
        config.write_text("semantic_review = true\n", encoding="utf-8")
        monkeypatch.setenv("DOCXCOMPARE_SEMANTIC_REVIEW", "false")

        assert main(["--config", str(config), str(expected), str(actual)]) == 1
        assert capsys.readouterr().out == "Document content does not match\n"

    def test_no_config_flag(self, documents, tmp_path, monkeypatch, capsys):
        expected, actual = documents
        (tmp_path / ".docxcompare.toml").write_text("semantic_review = true\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert main(["--no-config", str(expected), str(actual)]) == 1

    def test_invalid_config(self, documents, tmp_path, capsys):
        expected, actual = documents
        config = tmp_path / "settings.toml"
        config.write_text('reviewer = "libreoffice"\n', encoding="utf-8")

        assert main(["--config", str(config), str(expected), str(actual)]) == 4
        assert "reviewer" in capsys.readouterr().err
