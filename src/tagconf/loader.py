"""Entry points for loading config files into Documents."""

import io
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .exceptions import ConfigFileError
from .exceptions import InvalidFilePathError
from .models import Document
from .parser import normalize_overrides
from .parser import parse_lines

logger = logging.getLogger(__name__)


def load(path: str | os.PathLike[str] | None, overrides: Iterable[Any] = ()) -> Document:
    """Load the config file at path.

    The file is read line by line. Values tagged with one of the given
    override tags take priority over untagged values for the same key.

    Args:
        path: Path to the config file
        overrides: Active override tags; strings, enum members or any object
            whose ``str()`` is the tag name

    Returns:
        Loaded Document

    Raises:
        InvalidFilePathError: If path is empty or not an existing file
        ConfigSyntaxError: If the file does not follow the config grammar
    """
    if path is None or path == "" or not Path(path).is_file():
        raise InvalidFilePathError(path)

    tags = normalize_overrides(overrides)
    logger.debug(f"Loading config from {path} with overrides {sorted(tags)}")

    try:
        with open(path, encoding="utf-8") as f:
            return parse_lines(f, tags)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(f"Failed to read configuration from {path}: {e}") from e


def loads(text: str, overrides: Iterable[Any] = ()) -> Document:
    """Load config from an in-memory string.

    Lines are split the same way as when reading a file.

    Args:
        text: Config file contents
        overrides: Active override tags (see ``load``)

    Returns:
        Loaded Document
    """
    return parse_lines(io.StringIO(text, newline=None), overrides)
