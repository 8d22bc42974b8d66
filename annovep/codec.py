"""Split and join the nested delimiter structure of a CSQ-style field.

A composite field holds sub-entries (transcripts) separated by the outer
delimiter; each sub-entry holds sub-fields separated by the inner delimiter.
"""

from typing import List, Sequence

from annovep import INNER_DELIMITER, OUTER_DELIMITER


class CompositeFieldCodec:
    def __init__(self, outer: str = OUTER_DELIMITER, inner: str = INNER_DELIMITER):
        if outer == inner:
            raise ValueError("Outer and inner delimiters must differ")
        self.outer = outer
        self.inner = inner

    def split_outer(self, field: str) -> List[str]:
        """Split a field into sub-entries. An empty field yields ``[""]``."""
        return field.split(self.outer)

    def join_outer(self, subentries: Sequence[str]) -> str:
        return self.outer.join(subentries)

    def split_inner(self, subentry: str) -> List[str]:
        return subentry.split(self.inner)

    def key_of(self, subentry: str, position: int) -> str:
        """Return the sub-field at position, or "" if the sub-entry is too short."""
        fields = self.split_inner(subentry)
        if position < len(fields):
            return fields[position]
        return ""

    def append(self, subentry: str, value: str) -> str:
        """Append value as a new trailing sub-field."""
        return f"{subentry}{self.inner}{value}"

    def __repr__(self) -> str:
        return f"CompositeFieldCodec(outer={self.outer!r}, inner={self.inner!r})"
