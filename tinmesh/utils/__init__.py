"""Utility helpers for tinmesh."""

from .logging import StructuredLogger, mesh_logger

__all__ = [
    'StructuredLogger',
    'mesh_logger'
]
