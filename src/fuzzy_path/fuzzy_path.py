"""A lossy, normalized path string for quick fuzzy comparison.

Comparison rules:

- Case insensitive (full Unicode lowercase mapping)
- Backslashes are treated as forward slashes
- Trailing slashes are removed, except for a root slash
- Repeated slashes are collapsed to a single slash

Not handled:

- A Windows path never matches a POSIX path if either is absolute
  (``C:\\Users\\x`` vs ``/Users/x``)
- A Windows UNC path never matches a POSIX path
- No ``.``/``..`` resolution, no symlinks, no filesystem access
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

# Lone surrogates: Python's stand-ins for undecodable filename bytes
_SURROGATES = re.compile('[\ud800-\udfff]')
_REPLACEMENT_CHAR = '\ufffd'


def normalize(text: str) -> str:
    """
    Normalize path-like text for fuzzy comparison.

    Total over all input: never raises, never rejects.

    Args:
        text: Raw path text, POSIX or Windows style, relative or absolute

    Returns:
        Normalized text: forward slashes only, no repeated slashes, no trailing
        slash (except a lone root ``/``), every character lowercased

    Examples:
        >>> normalize("HELLO\\\\world/////foo/bar/////////")
        'hello/world/foo/bar'
        >>> normalize("\\\\")
        '/'
        >>> normalize("")
        ''
    """
    text = text.replace('\\', '/')

    trimmed = text.rstrip('/')
    if not trimmed and text:
        # Only slashes: keep the root
        trimmed = '/'

    normalized = []
    slash = False
    for char in trimmed:
        if char == '/':
            if not slash:
                slash = True
                normalized.append('/')
        else:
            slash = False
            # Per character, so 'Σ' is always 'σ' and 'İ' expands to 'i̇'
            normalized.append(char.lower())

    return ''.join(normalized)


def lossy_path_text(path: Union[str, bytes, "os.PathLike[Any]"]) -> str:
    """
    Convert a platform path to text, replacing anything undecodable.

    Bytes are decoded with the filesystem encoding. Undecodable bytes (and the
    surrogate escapes Python keeps for them in ``str`` paths) become U+FFFD.
    """
    raw = os.fspath(path)
    text = os.fsdecode(raw) if isinstance(raw, bytes) else raw

    lossy, count = _SURROGATES.subn(_REPLACEMENT_CHAR, text)
    if count:
        logger.debug(f"Replaced {count} undecodable character(s) in path: {lossy!r}")
    return lossy


@dataclass(frozen=True, order=True, init=False, repr=False)
class FuzzyPath:
    """
    A path reduced to a normalized string for fuzzy equality.

    Only compares equal to another ``FuzzyPath``: comparing against ``str`` or
    ``Path`` is always ``False`` (ordering raises ``TypeError``), so raw text
    has to go through normalization first.

    Equality, ordering and hashing use the normalized text only.

    Examples:
        >>> FuzzyPath("C:\\\\Photos\\\\2023\\\\") == FuzzyPath("c:/photos//2023")
        True
        >>> FuzzyPath("/").as_str()
        '/'
    """

    _normalized: str = field(default='')

    def __init__(self, path: Union[str, bytes, "os.PathLike[Any]", "FuzzyPath"] = '') -> None:
        if isinstance(path, FuzzyPath):
            normalized = path._normalized
        elif isinstance(path, str):
            normalized = normalize(path)
        elif isinstance(path, (bytes, os.PathLike)):
            normalized = normalize(lossy_path_text(path))
        else:
            raise TypeError(
                f"FuzzyPath expects str, bytes or os.PathLike, not {type(path).__name__}"
            )
        object.__setattr__(self, '_normalized', normalized)

    @classmethod
    def from_str(cls, text: str) -> "FuzzyPath":
        """Normalize ``text``. Same as ``FuzzyPath(text)``."""
        return cls(text)

    @classmethod
    def from_path(cls, path: Union[bytes, "os.PathLike[Any]"]) -> "FuzzyPath":
        """Normalize a platform path via lossy conversion to text."""
        return cls(lossy_path_text(path))

    @classmethod
    def from_str_unchecked(cls, text: str) -> "FuzzyPath":
        """
        Wrap ``text`` without normalizing it.

        It is a logic error to pass text that ``normalize`` would change:
        nothing checks it, and comparisons involving the result become
        meaningless. Meant for re-hydrating values that were already
        normalized and stored verbatim.
        """
        logger.debug(f"Constructing FuzzyPath without normalization: {text!r}")
        instance = cls.__new__(cls)
        object.__setattr__(instance, '_normalized', str(text))
        return instance

    @property
    def normalized(self) -> str:
        """The normalized text."""
        return self._normalized

    def as_str(self) -> str:
        """The normalized text."""
        return self._normalized

    def into_string(self) -> str:
        """The normalized text as a new ``str`` (the original input is gone)."""
        return self._normalized

    def to_path(self) -> Path:
        """
        Convenience ``pathlib.Path`` built from the normalized text.

        Lossy: pathlib drops ``.`` segments and turns ``""`` into ``"."``, so
        ``FuzzyPath(value.to_path())`` may differ from ``value``. Pass the
        ``FuzzyPath`` itself wherever a path is accepted (``os.fspath``) to
        keep the exact text.
        """
        return Path(self._normalized)

    def __fspath__(self) -> str:
        """Platform path text, exactly the normalized text."""
        return self._normalized

    def __str__(self) -> str:
        """The normalized text."""
        return self._normalized

    def __repr__(self) -> str:
        return f"FuzzyPath({self._normalized!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from .serialization import fuzzy_path_core_schema
        return fuzzy_path_core_schema(cls)
