"""
YAML loading with located, human-readable error reports.

Used to read the site configuration so that a broken ``debug_flags.yaml``
points the maintainer at the offending line instead of a bare traceback.
"""

import yaml
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum


class YamlErrorType(Enum):
    """Types of YAML errors that can occur."""

    SYNTAX_ERROR = "syntax_error"
    FILE_NOT_FOUND = "file_not_found"
    PERMISSION_ERROR = "permission_error"
    ENCODING_ERROR = "encoding_error"
    EMPTY_FILE = "empty_file"


@dataclass
class YamlError:
    """Detailed information about a YAML error."""

    error_type: YamlErrorType
    message: str
    line_number: Optional[int] = None
    column_number: Optional[int] = None
    context: Optional[str] = None
    suggestion: Optional[str] = None
    file_path: Optional[str] = None


class YamlValidator:
    """Loads a YAML file and collects detailed errors instead of raising."""

    def __init__(self):
        self.errors: List[YamlError] = []

    def validate_file(self, file_path: Union[str, Path]) -> Tuple[bool, Any, List[YamlError]]:
        """
        Load a YAML file.

        Args:
            file_path: Path to the YAML file

        Returns:
            Tuple of (is_valid, parsed_data, errors)
        """
        self.errors = []
        file_path = Path(file_path)

        if not file_path.is_file():
            self.errors.append(
                YamlError(
                    error_type=YamlErrorType.FILE_NOT_FOUND,
                    message=f"Configuration file not found: {file_path}",
                    file_path=str(file_path),
                    suggestion="Create the file or pass --config with the correct path.",
                )
            )
            return False, None, self.errors

        try:
            content = file_path.read_text(encoding="utf-8")
        except PermissionError:
            self.errors.append(
                YamlError(
                    error_type=YamlErrorType.PERMISSION_ERROR,
                    message=f"Permission denied reading file: {file_path}",
                    file_path=str(file_path),
                )
            )
            return False, None, self.errors
        except UnicodeDecodeError as e:
            self.errors.append(
                YamlError(
                    error_type=YamlErrorType.ENCODING_ERROR,
                    message=f"File encoding error: {e}",
                    file_path=str(file_path),
                    suggestion="Save the file with UTF-8 encoding.",
                )
            )
            return False, None, self.errors

        return self.validate_content(content, str(file_path))

    def validate_content(self, content: str, file_path: str = "<string>") -> Tuple[bool, Any, List[YamlError]]:
        self.errors = []
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            self.errors.append(self._parse_yaml_error(e, content, file_path))
            return False, None, self.errors

        if data is None:
            self.errors.append(
                YamlError(
                    error_type=YamlErrorType.EMPTY_FILE,
                    message="YAML file is empty or contains only comments",
                    file_path=file_path,
                    suggestion="Add a 'sites' list describing where flags are declared.",
                )
            )
            return False, None, self.errors

        return True, data, self.errors

    def _parse_yaml_error(self, yaml_error: yaml.YAMLError, content: str, file_path: str) -> YamlError:
        mark = getattr(yaml_error, "problem_mark", None)
        if mark is None:
            return YamlError(
                error_type=YamlErrorType.SYNTAX_ERROR,
                message=str(yaml_error),
                file_path=file_path,
                suggestion="Check indentation, colons after keys and matching quotes.",
            )

        lines = content.split("\n")
        line_num = mark.line + 1
        context_lines = []
        for i in range(max(0, line_num - 3), min(len(lines), line_num + 2)):
            prefix = ">>> " if i == line_num - 1 else "    "
            context_lines.append(f"{prefix}{i + 1:3d}: {lines[i]}")

        return YamlError(
            error_type=YamlErrorType.SYNTAX_ERROR,
            message=str(yaml_error),
            line_number=line_num,
            column_number=mark.column + 1,
            context="\n".join(context_lines),
            suggestion=self._generate_suggestion(str(yaml_error).lower()),
            file_path=file_path,
        )

    @staticmethod
    def _generate_suggestion(error_str: str) -> str:
        if "mapping values are not allowed here" in error_str:
            return "Indentation problem or missing colon. Regular expressions containing ': ' must be quoted."
        if "found character '\\t'" in error_str:
            return "YAML doesn't allow tab characters for indentation. Use spaces instead."
        if "found unknown escape character" in error_str:
            return "Backslashes inside double quotes are escapes. Use single quotes for regular expressions."
        if "found unexpected end of stream" in error_str:
            return "The file ended unexpectedly. Check for unclosed brackets or quotes."
        if "expected <block end>" in error_str:
            return "Indentation error. Make sure list items under 'sites' line up."
        return "Check the YAML syntax around this line."

    def format_errors(self, errors: List[YamlError]) -> str:
        """Format errors into a human-readable string."""
        if not errors:
            return "No errors found."

        formatted_lines = ["=" * 80, "YAML CONFIGURATION ERROR(S) DETECTED", "=" * 80]
        for i, error in enumerate(errors, 1):
            formatted_lines.append(f"\nError #{i}:")
            formatted_lines.append(f"  Type: {error.error_type.value}")
            formatted_lines.append(f"  File: {error.file_path}")
            if error.line_number:
                formatted_lines.append(
                    f"  Location: Line {error.line_number}, Column {error.column_number}"
                )
            formatted_lines.append(f"  Message: {error.message}")
            if error.context:
                formatted_lines.append("\n  Context:")
                for line in error.context.split("\n"):
                    formatted_lines.append(f"    {line}")
            if error.suggestion:
                formatted_lines.append(f"\n  Suggestion: {error.suggestion}")
            formatted_lines.append("-" * 60)
        return "\n".join(formatted_lines)
