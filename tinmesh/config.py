"""
Configuration for triangulation runs.

This module provides the configuration dataclass shared by the public entry
point and the command line, with validation, defaults and dict round-trips.
"""

import logging
import math
from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, Optional

# Set up logging
logger = logging.getLogger(__name__)


@dataclass
class TriangulationConfig:
    """
    Parameters of a greedy triangulation.

    ``max_error`` is the only parameter the algorithm needs; the caps are
    optional early-stopping limits for callers that need bounded output.
    Errors are never negative, so a negative ``max_error`` is clamped to 0.
    """
    max_error: float = 1.0
    max_vertices: Optional[int] = None
    max_triangles: Optional[int] = None

    # Optional parameters (stored as dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            self.max_error = float(self.max_error)
        except (TypeError, ValueError):
            raise ValueError(f"max_error must be a number, got {self.max_error!r}") from None

        if math.isnan(self.max_error):
            raise ValueError(f"max_error must be a number, got {self.max_error}")

        if self.max_error < 0:
            logger.warning(f"Negative max_error {self.max_error} treated as 0")
            self.max_error = 0.0

        if self.max_vertices is not None and self.max_vertices < 4:
            raise ValueError(f"max_vertices must be at least 4, got {self.max_vertices}")

        if self.max_triangles is not None and self.max_triangles < 2:
            raise ValueError(f"max_triangles must be at least 2, got {self.max_triangles}")

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result = asdict(self)
        # Remove extra if empty
        if not result['extra']:
            del result['extra']
        return result

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'TriangulationConfig':
        """
        Create configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            New TriangulationConfig instance
        """
        names = [f.name for f in fields(cls)]
        known_params = {k: v for k, v in config_dict.items() if k in names}
        extra_params = {k: v for k, v in config_dict.items() if k not in known_params}

        config = cls(**known_params)
        config.extra.update(extra_params)
        if extra_params:
            logger.debug(f"Unrecognised configuration keys kept in extra: {sorted(extra_params)}")

        return config
