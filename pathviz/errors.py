"""
Exception types raised by the pathfinding engine.

Everything derives from PathvizError, which is a ValueError so callers that
already guard against bad input with ``except ValueError`` keep working.
An unreachable end cell is *not* an error: searches return an empty path.
"""


class PathvizError(ValueError):
    """Base class for engine errors reported back to the caller."""


class InvalidGrid(PathvizError):
    """Grid is empty, ragged, has unknown cell values or duplicate endpoints."""


class MissingEndpoint(PathvizError):
    """Grid has no start cell or no end cell."""


class UnknownAlgorithm(PathvizError):
    """Requested algorithm name is not one of the registered searches."""


class LayoutNotFound(PathvizError, KeyError):
    """No saved layout exists under the requested id."""

    def __str__(self) -> str:
        # KeyError.__str__ would wrap the message in quotes
        return ValueError.__str__(self)
