import json
import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Optional

logger = logging.getLogger(__name__)


def _check_real(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")


@dataclass
class LayoutConfig:
    """Physics constants for the force-directed layout."""

    repulsion: float = 5000.0
    attraction: float = 0.01
    gravity: float = 0.001
    damping: float = 0.9
    min_distance: float = 30.0
    margin: float = 40.0
    iterations: int = 80
    # Summed |velocity| under which the loop stops early; None runs every iteration.
    convergence_threshold: Optional[float] = None

    def __post_init__(self):
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int):
            raise ValueError(f"iterations must be an int, got {self.iterations!r}")
        if self.iterations <= 0:
            raise ValueError(f"iterations must be positive, got {self.iterations}")
        for name in ("repulsion", "attraction", "gravity", "damping", "min_distance", "margin"):
            _check_real(name, getattr(self, name))
        if self.convergence_threshold is not None:
            _check_real("convergence_threshold", self.convergence_threshold)
        for name in ("repulsion", "attraction", "gravity", "min_distance", "margin"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
        if self.min_distance == 0:
            raise ValueError("min_distance must be positive")
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"damping must be within [0, 1], got {self.damping}")
        if self.convergence_threshold is not None and self.convergence_threshold < 0:
            raise ValueError("convergence_threshold must not be negative")

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Ignoring unknown layout setting '{key}'")
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def load(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def to_dict(self):
        return asdict(self)
