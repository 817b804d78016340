class PublicationLoadError(RuntimeError):
    """The publication file could not be opened or parsed."""


class PositionsUnavailable(Exception):
    """The positions list of a publication could not be produced."""
