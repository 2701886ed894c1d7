"""
graph_structure/exceptions.py — Error types raised by structural metrics.

Each error subclasses the closest builtin so callers can catch either the
package-specific type or the generic one (ArithmeticError, ValueError).
"""


class StructureError(Exception):
    """Base class for all graph_structure errors."""


class UndefinedMetric(StructureError, ArithmeticError):
    """Raised when a metric would divide by zero.

    Happens for every modularity metric on a graph with no edges, and for the
    scaled modularity when the maximum modularity of the partition is zero
    while the raw modularity is not.
    """


class InvalidPartition(StructureError, ValueError):
    """Raised when a partition does not assign every vertex to exactly one module."""
