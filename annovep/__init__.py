"""VEP CSQ tag annotator package.

annovep adds a new sub-field to every transcript of the VEP ``CSQ`` INFO field
of a VCF/BCF file. The value is looked up, per transcript, in a two-column
tab-separated table keyed by the transcript's gene identifier, and the
``Format:`` list of the field's header description is extended accordingly.
"""

__version__ = "0.1.0"

# Package-wide constants
DEFAULT_FIELD = "CSQ"
KEY_POSITION = 4
OUTER_DELIMITER = ","
INNER_DELIMITER = "|"
