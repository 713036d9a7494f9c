"""Custom exceptions for Population Genetics Hub."""


class PopGenHubError(Exception):
    """Base exception for Population Genetics Hub."""

    pass


class InputValidationError(PopGenHubError):
    """Raised when alignment input validation fails."""

    def __init__(self, message: str, field: str = ""):
        self.field = field
        super().__init__(message)


class ConfigurationError(PopGenHubError):
    """Raised when configuration or analysis options are invalid."""

    pass


class WindowSliceError(PopGenHubError):
    """Raised when a sliding window does not hold the configured number of columns."""

    def __init__(self, window_index: int, expected: int, actual: int):
        self.window_index = window_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Window {window_index} holds {actual} gap-free columns, expected {expected}"
        )


class AlignmentFormatError(InputValidationError):
    """Raised when an alignment file cannot be parsed."""

    def __init__(self, fmt: str, message: str, line_number: int = 0):
        self.fmt = fmt
        self.line_number = line_number
        location = f" (line {line_number})" if line_number else ""
        super().__init__(f"Invalid {fmt} alignment{location}: {message}", "input_path")
