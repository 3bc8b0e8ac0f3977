"""tagconf: Sectioned config files with environment override tags.

Config files group typed key/value entries into sections. Any entry can be
tagged with an override (``key<tag> = value``) that only applies when the
tag is active for the load:

    ```ini
    [ftp]
    path = /tmp/                 ; default
    path<production> = /srv/ftp  ; used when "production" is active
    enabled = no
    params = array, of, values
    ```

Values are typed on load: booleans (``yes``/``no``/``true``/``false``/``1``/``0``),
integers, floats, quoted strings, comma-separated lists, and plain strings.

Public API:
    load: Load a config file into a Document
    loads: Load config text into a Document
    Document, Section: Read-only loaded config
    OverrideSettings: Three-scope YAML settings choosing active overrides
    ConfigPaths, Scope: Settings file locations
    ConfigError and subclasses: Exception types

Example:
    ```python
    from tagconf import load

    config = load("app.conf", overrides=["production"])
    config["ftp"]["path"]          # "/srv/ftp"
    config["ftp"].get("missing")   # None
    config.lookup("ftp.enabled")   # False
    ```
"""

from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigSyntaxError
from .exceptions import ConfigValidationError
from .exceptions import DuplicateSectionError
from .exceptions import InvalidFilePathError
from .exceptions import InvalidKeyError
from .exceptions import KeyValueOutsideSectionError
from .exceptions import MalformedLineError
from .exceptions import SectionNameWhitespaceError
from .loader import load
from .loader import loads
from .models import ConfigPaths
from .models import Document
from .models import Scope
from .models import Section
from .parser import coerce_value
from .parser import parse_lines
from .parser import strip_comment
from .settings import OverrideSettings

__version__ = "0.1.0"

__all__ = [
    "load",
    "loads",
    "parse_lines",
    "coerce_value",
    "strip_comment",
    "Document",
    "Section",
    "OverrideSettings",
    "ConfigPaths",
    "Scope",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
    "ConfigSyntaxError",
    "InvalidFilePathError",
    "KeyValueOutsideSectionError",
    "DuplicateSectionError",
    "SectionNameWhitespaceError",
    "InvalidKeyError",
    "MalformedLineError",
]
