class ImportFailure(Exception):
    """
    Raised when one placeholder import fails.

    The importer catches every subclass and reports the iteration as failed,
    so these never escape a batch.
    """


class FetchError(ImportFailure):
    """The image service errored, timed out, or returned an empty body."""


class StorageWriteError(ImportFailure):
    """The fetched bytes could not be written to the asset store."""


class CatalogRegistrationError(ImportFailure):
    """The media catalog refused or failed to record a stored file."""


class InvalidCountError(ValueError):
    """Raised for an out-of-range batch size when the count policy is 'reject'."""
