"""Per-record CSQ annotation.

The ``AnnotationContext`` is built once at initialization and carries
everything a record needs: the new tag name, the lookup table, the codec and
the key position. ``AnnotationEngine`` uses it to patch the schema once and to
annotate each record's field.
"""

import dataclasses
import logging
from typing import Optional, Sequence

from annovep import DEFAULT_FIELD, INNER_DELIMITER, KEY_POSITION, OUTER_DELIMITER
from annovep.codec import CompositeFieldCodec
from annovep.errors import UsageError
from annovep.lookup import LookupTable
from annovep.schema import patch_description
from annovep.utils.validation import validate_tag_name

logger = logging.getLogger("annovep")

USAGE = (
    "A tool to add tags to the CSQ field in VEP-annotated VCFs\n"
    "Usage: annovep <in.vcf> -- TAG_NAME TSV_FILE\n"
)


@dataclasses.dataclass(frozen=True)
class AnnotationContext:
    tag_name: str
    table: LookupTable
    field: str = DEFAULT_FIELD
    key_position: int = KEY_POSITION
    codec: CompositeFieldCodec = dataclasses.field(default_factory=CompositeFieldCodec)


def init_context(
    args: Sequence[str],
    field: str = DEFAULT_FIELD,
    key_position: int = KEY_POSITION,
    outer_delimiter: str = OUTER_DELIMITER,
    inner_delimiter: str = INNER_DELIMITER,
) -> AnnotationContext:
    """Build the annotation context from ``(TAG_NAME, TSV_FILE)``.

    Raises:
        UsageError: If fewer than two arguments are given or the tag name is invalid
        LoadError: If the table cannot be read or has no valid rows
    """
    if len(args) < 2:
        raise UsageError(USAGE)
    tag_name, table_path = args[0], args[1]
    validate_tag_name(tag_name, outer_delimiter, inner_delimiter)

    table = LookupTable.load(table_path)
    logger.debug(
        f"Adding {tag_name} to INFO/{field} transcripts, key at position {key_position}"
    )
    return AnnotationContext(
        tag_name=tag_name,
        table=table,
        field=field,
        key_position=key_position,
        codec=CompositeFieldCodec(outer_delimiter, inner_delimiter),
    )


class AnnotationEngine:
    def __init__(self, context: AnnotationContext):
        self.context = context

    def patch_schema(self, description: str, new_tag_name: Optional[str] = None) -> str:
        """Append the new sub-field name to the Format list of description.

        Raises:
            SchemaNotFound: If description has no Format declaration
        """
        tag_name = new_tag_name if new_tag_name is not None else self.context.tag_name
        return patch_description(description, tag_name, self.context.codec.inner)

    def annotate_subentry(self, subentry: str) -> str:
        ctx = self.context
        key = ctx.codec.key_of(subentry, ctx.key_position)
        value = ctx.table.query(key) if key else None
        return ctx.codec.append(subentry, value or "")

    def process(self, raw_field: Optional[str]) -> Optional[str]:
        """Annotate every sub-entry of raw_field, None if the field is absent."""
        if raw_field is None:
            return None
        codec = self.context.codec
        return codec.join_outer(
            [self.annotate_subentry(s) for s in codec.split_outer(raw_field)]
        )
