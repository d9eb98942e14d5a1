"""Exceptions raised by the loading helpers around the analysis engine."""


class PrintabilityError(Exception):
    """Base class for printability errors."""


class MeshLoadError(PrintabilityError):
    """A mesh file could not be read as a single solid."""


class CatalogError(PrintabilityError):
    """A parameter catalog file is missing or malformed."""
