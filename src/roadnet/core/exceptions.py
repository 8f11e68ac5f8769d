"""
Custom exceptions for the road network engine.

This module defines the hierarchy of exceptions used by the engine and its
surrounding glue. The graph engine itself treats unknown nodes, missing edges
and unreachable targets as ordinary results, so these exceptions are raised
only at the edges of the system: file persistence, configuration loading and
the strict helpers used by the command line.
"""


class RoadnetError(Exception):
    """Base class for all road network errors."""


class StorageError(RoadnetError):
    """
    Raised when reading or writing a network file fails.

    This is the distinct failure kind reported for I/O problems. A file that
    can be read but contains no usable records is not an error; it decodes to
    an empty network.

    Examples:
        * Network file does not exist
        * Permission denied while saving
        * Backup copy could not be created
    """


class ConfigurationError(RoadnetError):
    """
    Raised when configuration is invalid.

    Examples:
        * Configuration file fails schema validation
        * Environment override cannot be converted to the expected type
    """


class GraphOperationError(RoadnetError):
    """
    Raised when a caller explicitly demands a result that does not exist.

    Searches report "no path" as a normal result. This error exists for strict
    helpers such as ``SearchResult.require_path`` that turn that result into
    a failure on request.
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class ResourceNotFoundError(RoadnetError):
    """Raised when a named resource does not exist."""


class NodeNotFoundError(ResourceNotFoundError):
    """
    Raised when a user names a node that is not part of the network.

    Only the session and command line raise this; graph mutators silently
    ignore unknown keys.
    """


class EdgeNotFoundError(ResourceNotFoundError):
    """Raised when a user names a connection that is not part of the network."""


class InvalidOperationError(RoadnetError):
    """
    Raised when an editor operation is rejected before reaching the engine.

    Examples:
        * Connecting a node to itself
        * Adding a connection without a label
        * Adding a node whose key is already taken
    """
