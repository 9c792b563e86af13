"""Custom exceptions for configuration management."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Exception raised when configuration validation fails.

    Stores the individual validation errors plus suggestions for fixing them,
    and renders all of it as one readable message.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)

    @classmethod
    def from_validation_error(
        cls, error: ValidationError, suggestions: Optional[List[str]] = None
    ) -> "ConfigurationError":
        """Convert a pydantic ValidationError into a ConfigurationError.

        Args:
            error: Validation error raised by AppConfig.model_validate
            suggestions: Optional suggestions to attach

        Returns:
            ConfigurationError listing one line per failing field
        """
        errors = []
        for item in error.errors():
            field_path = " -> ".join(str(loc) for loc in item["loc"]) or "config"
            error_type = item["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "dict_type", "list_type", "bool_type"):
                expected_type = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {item.get('input')!r}"
                )
            elif error_type == "enum":
                errors.append(f"Invalid value for '{field_path}': {item['msg']}")
            else:
                errors.append(f"{field_path}: {item['msg']}")

        return cls(
            "Configuration validation failed",
            errors=errors,
            suggestions=suggestions
            or [
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        )
