#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the govspeak_paste library.

HTML content itself never raises: malformed or unexpected markup degrades to
best-effort text. These exceptions cover misuse of the API and problems in
the surrounding configuration.

Exception Hierarchy
-------------------
- GovspeakPasteError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (bad option values)
    - InvalidInputError (input that is neither markup nor a parsed tree)

  - DependencyError (configured HTML tree builder not installed)

  - ConfigError (unreadable or malformed CLI configuration file)

"""

from typing import Any


class GovspeakPasteError(Exception):
    """Base exception class for all govspeak_paste-specific errors.

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


class ValidationError(GovspeakPasteError):
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
    """Exception raised when a GovspeakOptions field has an unusable value."""


class InvalidInputError(ValidationError):
    """Exception raised when the converter is given something other than HTML.

    Accepted inputs are a string of markup or a BeautifulSoup element.
    """

    def __init__(self, input_value: Any):
        """Initialize with the rejected input value."""
        super().__init__(
            f"Expected an HTML string or BeautifulSoup element, got {type(input_value).__name__}",
            parameter_name="html",
            parameter_value=input_value,
        )


class DependencyError(GovspeakPasteError):
    """Exception raised when the configured HTML tree builder is not available.

    Parameters
    ----------
    html_parser : str
        The BeautifulSoup tree builder that was requested
    missing_packages : list[str]
        Packages that need to be installed to provide it

    Attributes
    ----------
    html_parser : str
        The requested tree builder
    missing_packages : list[str]
        Packages that need to be installed
    install_command : str
        Command to install the missing packages

    """

    def __init__(self, html_parser: str, missing_packages: list[str]):
        """Initialize the dependency error with package details."""
        self.html_parser = html_parser
        self.missing_packages = missing_packages
        self.install_command = f"pip install {' '.join(missing_packages)}" if missing_packages else ""

        message = f"HTML parser '{html_parser}' is not available to BeautifulSoup"
        if self.install_command:
            message += f". Install it with: {self.install_command}"
        super().__init__(message)


class ConfigError(GovspeakPasteError):
    """Exception raised when a configuration file cannot be read or parsed.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying parse or I/O error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error with the file path."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path
