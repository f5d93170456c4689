"""Exception types raised by depusage."""


class DepusageError(Exception):
    """Base class for all depusage errors."""


class ParseError(DepusageError):
    """A source file could not be parsed into a usable syntax tree."""

    def __init__(self, file_name: str, message: str, line: int | None = None) -> None:
        self.file_name = file_name
        self.message = message
        self.line = line
        location = f"{file_name}:{line}" if line is not None else file_name
        super().__init__(f"{location}: {message}")


class ManifestError(DepusageError):
    """The package.json manifest is missing or malformed."""


class ConfigError(DepusageError):
    """The depusage configuration file is malformed."""
