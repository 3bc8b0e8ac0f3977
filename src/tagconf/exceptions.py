"""Exceptions for tagconf."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigFileError(ConfigError):
    """Error reading or writing configuration file."""

    pass


class InvalidFilePathError(ConfigFileError):
    """Config file path is empty or does not point to an existing file."""

    def __init__(self, path: object = None):
        self.path = path
        super().__init__(f"Invalid file path: {'' if path is None else path}")


class ConfigValidationError(ConfigError):
    """Error validating configuration data."""

    pass


class ConfigSyntaxError(ConfigValidationError):
    """Config file text does not follow the section/key-value grammar.

    Attributes:
        line_number: 1-based line of the offending text, when known
    """

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        super().__init__(message)


class KeyValueOutsideSectionError(ConfigSyntaxError):
    """Key-value line appears before any section header."""

    def __init__(self, line_number: int | None = None):
        super().__init__("Key-value pair must be part of a section", line_number)


class DuplicateSectionError(ConfigSyntaxError):
    """Section name declared more than once."""

    def __init__(self, section: str, line_number: int | None = None):
        self.section = section
        super().__init__(f"Duplicate section: {section}", line_number)


class SectionNameWhitespaceError(ConfigSyntaxError):
    """Section header name contains whitespace."""

    def __init__(self, section: str, line_number: int | None = None):
        self.section = section
        super().__init__(f"Section name may not contain whitespace: {section}", line_number)


class InvalidKeyError(ConfigSyntaxError):
    """Empty key or malformed override tag."""

    def __init__(self, line: str, line_number: int | None = None):
        self.line = line
        super().__init__(f"Invalid key: {line}", line_number)


class MalformedLineError(ConfigSyntaxError):
    """Line is neither blank, a section header, nor a key-value pair."""

    def __init__(self, line: str, line_number: int | None = None):
        self.line = line
        super().__init__(f"Malformed config file: {line}", line_number)
