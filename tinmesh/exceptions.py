#!/usr/bin/env python3
"""
tinmesh Exceptions

This module defines custom exceptions used throughout the tinmesh library.
"""

class TinMeshException(Exception):
    """Base class for all tinmesh exceptions."""
    pass

class InvalidDimensionsError(TinMeshException):
    """Exception raised when height samples don't match the given grid size."""
    pass

class OutOfBoundsError(TinMeshException):
    """Exception raised when a grid coordinate falls outside the height field."""
    pass

class TopologyError(TinMeshException):
    """Base class for broken mesh invariants (always an implementation bug)."""
    pass

class InconsistentTopologyError(TopologyError):
    """Exception raised when half-edge adjacency or winding is corrupt."""
    pass

class InvalidInsertionError(TopologyError):
    """Exception raised when a vertex is inserted where it cannot go."""
    pass

class TinMeshIOError(TinMeshException):
    """Exception raised when height data can't be loaded or a mesh can't be written."""
    pass
