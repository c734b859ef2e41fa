"""Exception hierarchy for vault queries."""


class VaultQueryError(Exception):
    """Base class for errors raised by the query engine."""


class NotAccessibleError(VaultQueryError):
    """A container could not be listed.

    Raised by document sources and propagated by the walker: a query that cannot
    see part of the vault aborts instead of returning an incomplete result set.
    """


class DocumentFetchError(VaultQueryError):
    """A single document could not be fetched or parsed.

    Search operations catch this, skip the document, and carry on.
    """


class DocumentNotFoundError(DocumentFetchError):
    """The requested document does not exist."""


class SectionNotFoundError(VaultQueryError, ValueError):
    """A requested heading is not present in a note."""
