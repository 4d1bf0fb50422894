#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the markguard library.

Sanitization is fail-closed: markup the policy does not recognize is removed,
never reported. The exceptions below cover the remaining failure paths, which
are bad caller input and markup the tree adapter cannot parse.

Exception Hierarchy
-------------------
- MarkguardError (base exception)

  - ValidationError (parameter/option validation)
    - PolicyError (invalid sanitization policy)

  - ParsingError (markup cannot be turned into a tree)

"""

from typing import Any


class MarkguardError(Exception):
    """Base exception class for all markguard-specific errors.

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


class ValidationError(MarkguardError):
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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class PolicyError(ValidationError):
    """Exception raised when a sanitization policy is constructed with unsafe values.

    An empty wildcard prefix, for example, would match every attribute name
    and silently turn an allowlist into "allow everything".
    """


class ParsingError(MarkguardError):
    """Exception raised when raw markup cannot be turned into a tree.

    Sanitization is aborted when this is raised; no partially sanitized
    output is ever returned.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


__all__ = [
    "MarkguardError",
    "ValidationError",
    "PolicyError",
    "ParsingError",
]
