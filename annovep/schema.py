"""Structured edit of a field's ``Format:`` description.

VEP declares the CSQ layout in the INFO description, e.g.::

    Consequence annotations from Ensembl VEP. Format: Allele|Consequence|IMPACT|SYMBOL|Gene

The description is parsed into prefix, format list and suffix so that new
sub-field names are appended to the list rather than spliced into the text.
"""

import dataclasses
from typing import List

from annovep import INNER_DELIMITER
from annovep.errors import SchemaNotFound

FORMAT_MARKER = "Format: "


@dataclasses.dataclass
class SchemaDescription:
    prefix: str
    fields: List[str]
    suffix: str = ""
    delimiter: str = INNER_DELIMITER

    @classmethod
    def parse(cls, description: str, delimiter: str = INNER_DELIMITER) -> "SchemaDescription":
        """Parse a description, with or without its wrapping quotes.

        Raises:
            SchemaNotFound: If the description has no Format declaration
        """
        start = description.find(FORMAT_MARKER)
        if start < 0:
            raise SchemaNotFound(f"No '{FORMAT_MARKER.strip()}' declaration in description: {description!r}")
        start += len(FORMAT_MARKER)

        body = description[start:]
        suffix = ""
        if body.endswith('"'):
            body, suffix = body[:-1], '"'

        fields = body.split(delimiter) if body else []
        return cls(prefix=description[:start], fields=fields, suffix=suffix, delimiter=delimiter)

    def append(self, name: str) -> "SchemaDescription":
        self.fields.append(name)
        return self

    def __str__(self) -> str:
        return f"{self.prefix}{self.delimiter.join(self.fields)}{self.suffix}"


def patch_description(description: str, new_tag_name: str, delimiter: str = INNER_DELIMITER) -> str:
    """Return description with new_tag_name appended to its Format list."""
    return str(SchemaDescription.parse(description, delimiter).append(new_tag_name))
