"""Exceptions raised by annovep.

Initialization errors (``UsageError``, ``LoadError``) and ``AllocationError``
are fatal. ``SchemaNotFound`` is reported as a warning and processing goes on.
"""


class AnnoVepError(Exception):
    """Base class for all annovep errors."""


class UsageError(AnnoVepError, ValueError):
    """Missing or invalid initialization arguments."""


class LoadError(AnnoVepError, RuntimeError):
    """The lookup table could not be opened or yielded no valid entries."""


class SchemaNotFound(AnnoVepError, LookupError):
    """No Format declaration was found for the target field."""


class AllocationError(AnnoVepError, MemoryError):
    """Resource exhaustion while building an annotated field."""
