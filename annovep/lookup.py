"""Sorted in-memory key/value table used to annotate CSQ transcripts.

The table is read from a two-column tab-separated file (or URL), one
``key<TAB>value`` row per line, and kept as a tuple of entries sorted by key.
Lookups are binary searches over that tuple.
"""

from __future__ import annotations

import bisect
import dataclasses
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from annovep.errors import LoadError
from annovep.utils.validation import is_url

logger = logging.getLogger("annovep")


@dataclasses.dataclass(frozen=True)
class TableEntry:
    key: str
    value: str


def parse_line(line: str) -> Optional[TableEntry]:
    """Parse one table row, returning None for rows that are not valid.

    A valid row has a non-empty first column and a non-empty second column.
    Columns after the second are ignored.
    """
    cols = line.rstrip("\r\n").split("\t")
    if len(cols) < 2 or not cols[0] or not cols[1]:
        return None
    return TableEntry(key=cols[0], value=cols[1])


class LookupTable:
    """Read-only table sorted by key.

    Duplicate keys are kept in file order; ``query`` returns the value of the
    last occurrence.
    """

    def __init__(self, entries: Iterable[TableEntry], source: str = "<memory>"):
        # sorted() is stable, equal keys keep their file order
        self._entries: Tuple[TableEntry, ...] = tuple(sorted(entries, key=lambda e: e.key))
        self._keys: Tuple[str, ...] = tuple(e.key for e in self._entries)
        self.source = source

    @classmethod
    def load(cls, source: Path | str) -> "LookupTable":
        """Load a table from a local path or an http(s) URL.

        Raises:
            LoadError: If the source cannot be opened or yields no valid rows
        """
        source = str(source)
        entries: List[TableEntry] = []
        skipped = 0
        for lineno, line in enumerate(_read_lines(source), start=1):
            entry = parse_line(line)
            if entry is None:
                skipped += 1
                logger.debug(f"Skipping malformed line {lineno} in {source}: {line.rstrip()!r}")
                continue
            entries.append(entry)

        if not entries:
            raise LoadError(f"Error reading the file {source}: no valid key/value rows")

        table = cls(entries, source=source)
        duplicates = table.duplicate_keys()
        if duplicates:
            logger.warning(
                f"{len(duplicates)} duplicated keys in {source}, the last occurrence is used "
                f"(e.g. {duplicates[0]})"
            )
        logger.info(f"Loaded {len(table)} entries from {source} ({skipped} lines skipped)")
        return table

    def query(self, key: str) -> Optional[str]:
        """Return the value stored for key, or None if the key is absent."""
        idx = bisect.bisect_right(self._keys, key) - 1
        if idx >= 0 and self._keys[idx] == key:
            return self._entries[idx].value
        return None

    def duplicate_keys(self) -> List[str]:
        return sorted({a for a, b in zip(self._keys, self._keys[1:]) if a == b})

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.query(key) is not None

    def __iter__(self) -> Iterator[TableEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"LookupTable(source={self.source!r}, entries={len(self)})"


def _read_lines(source: str) -> List[str]:
    if is_url(source):
        import requests

        try:
            resp = requests.get(source, timeout=30)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Error reading the file {source}: {e}") from e
        return resp.text.splitlines()

    try:
        with open(Path(source).expanduser(), "r") as f:
            return f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Error reading the file {source}: {e}") from e
