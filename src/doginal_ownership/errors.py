"""Exceptions raised while building and scanning a Doginal collection."""


class DoginalOwnershipError(Exception):
    """Base class for all errors raised by this package."""


class DirectoryAccessError(DoginalOwnershipError):
    """The directory of HTML pages cannot be listed."""


class MalformedFilenameError(DoginalOwnershipError, ValueError):
    """A page filename has the expected prefix/suffix but no numeric token."""


class DocumentParseError(DoginalOwnershipError):
    """A single HTML page could not be read or parsed."""


class OutputWriteError(DoginalOwnershipError):
    """A report file could not be written."""


class CollectionSizeError(DoginalOwnershipError):
    """A manifest source does not hold the expected number of inscriptions."""


class DuplicateInscriptionError(DoginalOwnershipError):
    """The same inscription ID appears more than once in a manifest."""
