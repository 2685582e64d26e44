#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the docxcompare library.

This module defines the typed failures raised while comparing two document
packages. None of them are recovered inside the comparison core; they
propagate to the caller carrying the offending path and the underlying
cause so the CLI can report them without re-deriving anything.

Exception Hierarchy
-------------------
- DocxCompareError (base exception)

  - ValidationError (invalid options or configuration values)

  - FileError (file access and I/O)
    - NotFoundError (path doesn't exist)
    - FileAccessError (permissions, read failures on an existing path)
    - ArchiveFormatError (not a valid zip container, corrupt entry)

  - ExternalToolError (semantic reviewer unavailable or failed)
    - DependencyError (reviewer's optional packages missing)

"""

from __future__ import annotations

from typing import Any


class DocxCompareError(Exception):
    """Base exception class for all docxcompare-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DocxCompareError):
    """Exception raised for invalid parameters or configuration values.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(DocxCompareError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class NotFoundError(FileError):
    """Exception raised when a compared file does not exist.

    Parameters
    ----------
    file_path : str
        Path to the file that was not found
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an existing file cannot be read.

    This includes permission errors, directories passed as files, and
    I/O failures in the middle of a read.

    Parameters
    ----------
    file_path : str
        Path to the file that cannot be accessed
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot read file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ArchiveFormatError(FileError):
    """Exception raised when a file is not a valid zip container.

    Also raised when an entry inside an otherwise readable archive is
    corrupt (bad CRC, truncated deflate stream).

    Parameters
    ----------
    message : str
        Description of what is malformed
    file_path : str, optional
        Path to the malformed archive
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the archive format error."""
        super().__init__(message, file_path=file_path, original_error=original_error)


class ExternalToolError(DocxCompareError):
    """Exception raised when the semantic reviewer is unavailable or fails.

    Parameters
    ----------
    message : str
        Description of the failure
    tool_name : str, optional
        Name of the reviewer or external application involved
    original_error : Exception, optional
        The underlying exception raised by the tool

    Attributes
    ----------
    tool_name : str or None
        The reviewer that failed

    """

    def __init__(self, message: str, tool_name: str | None = None, original_error: Exception | None = None):
        """Initialize the external tool error."""
        super().__init__(message, original_error=original_error)
        self.tool_name = tool_name


class DependencyError(ExternalToolError):
    """Exception raised when a reviewer's optional packages are not available.

    Parameters
    ----------
    component : str
        Name of the component requiring dependencies (e.g. "word")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The ImportError that triggered this error

    """

    def __init__(
        self,
        component: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"The {component} reviewer requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"The {component} reviewer has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, tool_name=component, original_error=original_import_error)
        self.component = component
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
