"""Line grammar, value coercion and override resolution for config files.

Each load runs a single sequential pass over the input:

    raw line -> strip_comment -> classify_line
        SECTION   -> ParseState.open_section
        KEY_VALUE -> split_key_value -> coerce_value -> ParseState.assign

All per-load bookkeeping lives in a ParseState created by parse_lines, so
separate loads never share mutable state.
"""

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from decimal import Decimal
from decimal import InvalidOperation
from enum import Enum
from typing import Any

from .exceptions import DuplicateSectionError
from .exceptions import InvalidKeyError
from .exceptions import KeyValueOutsideSectionError
from .exceptions import MalformedLineError
from .exceptions import SectionNameWhitespaceError
from .models import Document
from .models import Section
from .models import Value

logger = logging.getLogger(__name__)

COMMENT_DELIM = ";"
LIST_DELIM = ","
OVERRIDE_START_DELIM = "<"
OVERRIDE_END_DELIM = ">"
VALUE_ASSIGNMENT = "="

BOOLEANS = frozenset({"0", "1", "true", "false", "yes", "no"})
TRUE_LITERALS = frozenset({"1", "true", "yes"})

# Quoted literal, no escapes
STRING_PATTERN = re.compile(r"'[^']*'|\"[^\"]*\"")
SECTION_PATTERN = re.compile(r"\[([^\]\r\n]+)\]")
WHITESPACE_PATTERN = re.compile(r"\s")


class LineKind(Enum):
    """Classification of a comment-stripped line."""

    BLANK = "blank"
    SECTION = "section"
    KEY_VALUE = "key_value"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class KeyValue:
    """Decomposed assignment line."""

    key: str
    value: str
    override: str | None = None


# ===== Line Handling =====


def strip_comment(line: str) -> str:
    """Strip a trailing comment from a trimmed line.

    Comment delimiters inside quoted strings are ignored.

    Examples:
        >>> strip_comment("foo = bar ;this is a comment")
        'foo = bar'

        >>> strip_comment("path = 'a;b'")
        "path = 'a;b'"

        >>> strip_comment("; whole line")
        ''
    """
    if COMMENT_DELIM not in line:
        return line

    masked = STRING_PATTERN.sub(lambda match: " " * len(match.group(0)), line)
    comment_start = masked.find(COMMENT_DELIM)
    if comment_start == -1:
        return line

    return line[:comment_start].rstrip()


def classify_line(line: str, line_number: int | None = None) -> tuple[LineKind, str | None]:
    """Classify a comment-stripped line.

    Args:
        line: Trimmed line without comment
        line_number: Position in the input, attached to raised errors

    Returns:
        (kind, section name) where the name is only set for SECTION lines

    Raises:
        SectionNameWhitespaceError: If a section header name contains whitespace
    """
    if not line:
        return LineKind.BLANK, None

    match = SECTION_PATTERN.fullmatch(line)
    if match:
        name = match.group(1)
        if WHITESPACE_PATTERN.search(name):
            raise SectionNameWhitespaceError(name, line_number)
        return LineKind.SECTION, name

    if VALUE_ASSIGNMENT in line:
        return LineKind.KEY_VALUE, None

    return LineKind.MALFORMED, None


def split_key_value(line: str, line_number: int | None = None) -> KeyValue:
    """Split an assignment line into key, raw value and override tag.

    Raises:
        InvalidKeyError: If the key is empty or the override tag is malformed
    """
    assignment = line.index(VALUE_ASSIGNMENT)
    if assignment == 0:
        raise InvalidKeyError(line, line_number)

    key = line[:assignment].strip()
    value = line[assignment + 1 :].strip()
    override = None

    if OVERRIDE_START_DELIM in key and key.endswith(OVERRIDE_END_DELIM):
        start = key.index(OVERRIDE_START_DELIM)
        end = key.index(OVERRIDE_END_DELIM)
        override = key[start + 1 : end].strip()
        key = key[:start].strip()

        if not key or not override:
            raise InvalidKeyError(line, line_number)

    return KeyValue(key=key, value=value, override=override)


# ===== Type Coercion =====


def coerce_value(value: str) -> Value:
    """Convert a raw value string to bool, int, float, str or list.

    Examples:
        >>> coerce_value("'/tmp/'")
        '/tmp/'

        >>> coerce_value("yes")
        True

        >>> coerce_value("26214400")
        26214400

        >>> coerce_value("array, of, 2")
        ['array', 'of', 2]
    """
    if STRING_PATTERN.fullmatch(value):
        return value[1:-1]

    if value.lower() in BOOLEANS:
        return value.lower() in TRUE_LITERALS

    number = _parse_number(value)
    if number is not None:
        return number

    if LIST_DELIM in value:
        pieces = value.split(LIST_DELIM)
        while pieces and not pieces[-1]:
            pieces.pop()
        return [coerce_value(piece.strip()) for piece in pieces]

    return value


def _parse_number(value: str) -> int | float | None:
    # Decimal keeps integer literals exact at any length
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None

    if not number.is_finite():
        return None
    if number == number.to_integral_value():
        return int(number)

    result = float(number)
    return result if math.isfinite(result) else None


# ===== Parse State =====


@dataclass
class ParseState:
    """Mutable bookkeeping for one load.

    Attributes:
        overrides: Active override tags for this load
        current_section: Name of the most recent section header
        sections: Entries collected so far, keyed by section name
        overridden: (section, key) pairs already set by a matching override
        line_number: 1-based number of the line being processed
    """

    overrides: frozenset[str] = frozenset()
    current_section: str | None = None
    sections: dict[str, dict[str, Value]] = field(default_factory=dict)
    overridden: set[tuple[str, str]] = field(default_factory=set)
    line_number: int = 0

    def open_section(self, name: str) -> None:
        """Register a new empty section and make it current."""
        if name in self.sections:
            raise DuplicateSectionError(name, self.line_number)
        self.sections[name] = {}
        self.current_section = name

    def assign(self, key: str, value: Value, override: str | None = None) -> bool:
        """Store value for key in the current section, honoring overrides.

        Plain assignments never replace a value set by a matching override.
        Matching overrides always replace, so the last one in file order wins.
        Assignments tagged with an inactive override are discarded.

        Returns:
            True if the value was stored
        """
        if self.current_section is None:
            raise KeyValueOutsideSectionError(self.line_number)

        slot = (self.current_section, key)
        entries = self.sections[self.current_section]

        if override is None:
            if slot in self.overridden:
                logger.debug(f"Line {self.line_number}: '{key}' already overridden in [{slot[0]}], ignoring default")
                return False
            entries[key] = value
            return True

        if override in self.overrides:
            entries[key] = value
            self.overridden.add(slot)
            return True

        logger.debug(f"Line {self.line_number}: override '{override}' not active, ignoring '{key}'")
        return False

    def build(self) -> Document:
        """Freeze collected sections into a Document."""
        return Document({name: Section(name, entries) for name, entries in self.sections.items()})


# ===== Driver =====


def normalize_overrides(overrides: Iterable[Any] | str | None) -> frozenset[str]:
    """Normalize override tags to a set of strings.

    A bare string is a single tag rather than a sequence of characters.
    Enum members use their value.

    Examples:
        >>> sorted(normalize_overrides(["ubuntu", "production"]))
        ['production', 'ubuntu']

        >>> normalize_overrides("production")
        frozenset({'production'})
    """
    if overrides is None:
        return frozenset()
    if isinstance(overrides, str):
        return frozenset({overrides})
    return frozenset(_tag_name(tag) for tag in overrides)


def _tag_name(tag: Any) -> str:
    if isinstance(tag, Enum):
        return str(tag.value)
    return str(tag)


def parse_lines(lines: Iterable[str], overrides: Iterable[Any] | str | None = ()) -> Document:
    """Parse config lines into a Document.

    Lines are consumed one at a time; the Document is only built once the
    whole input parsed without error.

    Args:
        lines: Any iterable of text lines, e.g. an open file
        overrides: Active override tags; strings, enum members or any object
            whose ``str()`` is the tag name

    Returns:
        Loaded Document

    Raises:
        ConfigSyntaxError: On the first line that violates the grammar
    """
    state = ParseState(overrides=normalize_overrides(overrides))

    for line_number, raw_line in enumerate(lines, start=1):
        state.line_number = line_number
        _parse_line(raw_line, state)

    logger.debug(f"Parsed {state.line_number} lines into {len(state.sections)} sections")
    return state.build()


def _parse_line(raw_line: str, state: ParseState) -> None:
    line = strip_comment(raw_line.strip())
    kind, section = classify_line(line, state.line_number)

    if kind is LineKind.BLANK:
        return

    if kind is LineKind.SECTION:
        state.open_section(section)
        return

    if kind is LineKind.KEY_VALUE:
        if state.current_section is None:
            raise KeyValueOutsideSectionError(state.line_number)
        pair = split_key_value(line, state.line_number)
        state.assign(pair.key, coerce_value(pair.value), pair.override)
        return

    raise MalformedLineError(line, state.line_number)
