from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class TestResult:
    """Outcome of a single test run on one sequence"""

    __test__ = False

    name: str
    p_value: float
    success: bool
    elapsed: float = 0.0
    statistics: Mapping[str, Any] = field(default_factory=dict)
    advisories: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, 'statistics', MappingProxyType(dict(self.statistics)))

    def to_dict(self) -> dict[str, Any]:
        return {
            'success': self.success,
            'p_value': self.p_value,
            'elapsed': self.elapsed,
            'statistics': dict(self.statistics),
            'advisories': list(self.advisories),
        }


def clip_p_value(p_value: float) -> float:
    """Clamp floating point noise so the p-value stays in [0, 1]"""
    return float(min(1.0, max(0.0, p_value)))
