"""Exceptions raised by the transform pipeline."""


class TransformError(Exception):
    """Base class for failures that abort the transform of a file."""


class ParseError(TransformError, ValueError):
    """The source (or a template) could not be parsed without syntax errors."""

    def __init__(self, file_path: str, line: int, column: int):
        self.file_path = file_path
        self.line = line
        self.column = column
        super().__init__(f"Syntax error in {file_path} at line {line}, column {column}")


class PrintError(TransformError):
    """The rewritten tree did not render to valid source."""


class UnsupportedFileError(TransformError):
    """No language plugin handles the file extension."""
