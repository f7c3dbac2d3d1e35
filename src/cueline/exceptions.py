"""Custom exception hierarchy for CueLine with helpful error messages."""

from __future__ import annotations

from typing import Any


class CueLineError(Exception):
    """Base exception with helpful formatting for all CueLine errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class DatabaseError(CueLineError):
    """Database-related errors including connection and query issues."""

    pass


class ConfigurationError(CueLineError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class AudioAssetError(CueLineError):
    """Filesystem errors while managing audio assets."""

    pass


class NotFoundError(CueLineError):
    """A referenced script, character or dialogue line does not exist."""

    def __init__(
        self,
        resource: str,
        identifier: Any,
        hint: str | None = None,
    ) -> None:
        """Initialize not-found error.

        Args:
            resource: Kind of resource that was looked up (e.g. "Script")
            identifier: The identifier that failed to resolve
            hint: Optional hint for the user
        """
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message=f"{resource} not found",
            hint=hint,
            details={"id": identifier},
        )


class ValidationError(CueLineError):
    """Input validation errors with per-field messages."""

    def __init__(
        self,
        message: str,
        field_errors: dict[str, list[str]] | None = None,
        hint: str | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Summary of the validation failure
            field_errors: Mapping of field name to its error messages
            hint: Optional hint for the user
        """
        self.field_errors = field_errors or {}
        super().__init__(
            message=message,
            hint=hint,
            details=dict(self.field_errors) or None,
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        """Build a validation error for a single field."""
        return cls(message=message, field_errors={field: [message]})


def check_config_keys(config_data: dict[str, Any]) -> None:
    """Check for common configuration key mistakes.

    Args:
        config_data: Configuration dictionary to check

    Raises:
        ConfigurationError: If a misspelled key is detected
    """
    common_mistakes = {
        "db_path": "database_path",
        "db": "database_path",
        "audio_directory": "audio_dir",
        "audio_path": "audio_dir",
        "loglevel": "log_level",
        "log": "log_level",
        "host": "api_host",
        "port": "api_port",
    }

    for wrong_key, correct_key in common_mistakes.items():
        if wrong_key in config_data and correct_key not in config_data:
            raise ConfigurationError(
                message=f"Unknown configuration key: '{wrong_key}'",
                hint=f"Did you mean '{correct_key}'?",
                details={"found": wrong_key, "expected": correct_key},
            )
