#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the orgtasks library.

Malformed Org *content* never raises: it is reported as
:class:`orgtasks.model.results.ParseError` diagnostics on the returned
``ParseResult``. The exceptions defined here cover misuse of the API
(invalid options), file access in the convenience loaders and the CLI,
and configuration loading.

Exception Hierarchy
-------------------
- OrgTasksError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, directories, decoding)

  - ParsingError (internal parser failures surfaced by the loaders)

  - ConfigError (configuration file discovery and loading)

  - DependencyError (missing optional packages)

"""

from typing import Any


class OrgTasksError(Exception):
    """Base exception class for all orgtasks-specific errors.

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


class ValidationError(OrgTasksError):
    """Exception raised for invalid input parameters or options.

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


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong class is supplied.

    Parameters
    ----------
    parser_name : str
        Name of the parser that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        parser_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error with type information."""
        if message is None:
            message = (
                f"Parser '{parser_name}' expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.parser_name = parser_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(OrgTasksError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path information."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the error with the missing file path."""
        super().__init__(message or f"File not found: {file_path}", file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file exists but cannot be read or decoded."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the error with the inaccessible file path."""
        super().__init__(
            message or f"Cannot access file: {file_path}", file_path=file_path, original_error=original_error
        )


class ParsingError(OrgTasksError):
    """Exception raised when the parser itself fails unexpectedly.

    ``parse_org_content`` converts such failures into a single fatal
    diagnostic; this exception is raised only by callers that ask for
    strict behaviour, such as the ``raise_on_fatal`` loaders.

    Parameters
    ----------
    message : str
        Description of the failure
    source_path : str, optional
        Source path of the content being parsed

    """

    def __init__(self, message: str, source_path: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with source information."""
        super().__init__(message, original_error=original_error)
        self.source_path = source_path


class ConfigError(OrgTasksError):
    """Exception raised when a configuration file cannot be loaded or applied.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error with the file path."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class DependencyError(OrgTasksError):
    """Exception raised when an optional dependency is required but missing.

    Parameters
    ----------
    feature : str
        Name of the feature requiring the package
    missing_packages : list[str]
        Installable package names that are missing

    """

    def __init__(self, feature: str, missing_packages: list[str], message: str | None = None):
        """Initialize the dependency error with the missing package list."""
        if message is None:
            message = (
                f"'{feature}' requires the following packages: {', '.join(missing_packages)}. "
                f"Install with: pip install {' '.join(missing_packages)}"
            )
        super().__init__(message)
        self.feature = feature
        self.missing_packages = missing_packages
