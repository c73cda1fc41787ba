"""
Location resolution for diagnostics.

Syntax nodes carry keyword-style metadata. Usually it only records a line,
but nodes that were expanded from another file carry an explicit file
override, which always wins over the file being compiled.

Accepted metadata shapes:
    None                                  -> (file, 0)
    7                                     -> (file, 7)
    {"line": 7}                           -> (file, 7)
    [("line", 7), ("file", "lib/a.ex")]   -> ("lib/a.ex", 0)
    {"file": ("lib/a.ex", 3), "line": 7}  -> ("lib/a.ex", 3)
    {"file": "lib/a.ex", "file_line": 3}  -> ("lib/a.ex", 3)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True, slots=True)
class LocationMeta:
    """
    Location metadata attached to a syntax node.

    Attributes:
        line: Line of the node in the file being compiled (0 if unknown)
        file: Explicit file override, if the node came from another file
        file_line: Line inside the overriding file
    """

    line: int = 0
    file: Optional[str] = None
    file_line: int = 0

    @classmethod
    def from_keywords(cls, meta: Union[Mapping[str, Any], list, tuple]) -> LocationMeta:
        """Build metadata from a mapping or a sequence of (key, value) pairs."""
        if isinstance(meta, Mapping):
            pairs = meta
        else:
            # First occurrence of a key wins, like a keyword list lookup
            pairs = {}
            for key, value in meta:
                pairs.setdefault(key, value)

        line = coerce_line(pairs.get("line"))
        file = pairs.get("file")
        file_line = coerce_line(pairs.get("file_line"))

        if isinstance(file, (tuple, list)):
            file, file_line = file[0], coerce_line(file[1])

        return cls(line=line, file=file, file_line=file_line)

    @property
    def override(self) -> Optional[tuple[str, int]]:
        """The explicit (file, line) override, if present."""
        if self.file is None:
            return None
        return (self.file, self.file_line)


MetaLike = Union[None, int, LocationMeta, Mapping[str, Any], list, tuple]


def coerce_line(line: Any) -> int:
    """
    Normalize a line value to a non-negative integer.

    None becomes 0 and a (line, column, ...) position yields its line.
    """
    if line is None:
        return 0
    if isinstance(line, tuple) and line and isinstance(line[0], int):
        line = line[0]
    if isinstance(line, bool) or not isinstance(line, int):
        raise TypeError(f"line must be a non-negative integer or None, got {line!r}")
    if line < 0:
        raise ValueError(f"line must be non-negative, got {line}")
    return line


def to_meta(meta: MetaLike) -> Optional[LocationMeta]:
    """Convert any accepted metadata shape into a LocationMeta."""
    if meta is None or isinstance(meta, LocationMeta):
        return meta
    if isinstance(meta, int) and not isinstance(meta, bool):
        return LocationMeta(line=coerce_line(meta))
    if isinstance(meta, (Mapping, list, tuple)):
        return LocationMeta.from_keywords(meta)
    raise TypeError(f"unsupported location metadata: {meta!r}")


def resolve_location(meta: MetaLike, file: str) -> tuple[str, int]:
    """
    Pick the (file, line) a diagnostic should report.

    Args:
        meta: Location metadata of the offending node
        file: The file being compiled, used when there is no override

    Returns:
        The override verbatim, or the fallback file with the node's line
    """
    resolved = to_meta(meta)
    if resolved is None:
        return (file, 0)

    override = resolved.override
    if override is not None:
        return override

    return (file, resolved.line)
