# core/profiles.py
"""
Versioned scoring configurations.

A profile fixes the sub-score weights and the confidence threshold together, so
a deployment switches between matcher variants by name instead of by editing
constants in several places.
"""
import math
from dataclasses import dataclass, replace
from typing import Dict, Final, Optional


@dataclass(frozen=True)
class ScoringProfile:
    name: str
    intent: float
    keyword: float
    semantic: float
    category: float
    threshold: float

    def __post_init__(self) -> None:
        total = self.intent + self.keyword + self.semantic + self.category
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"profile {self.name!r} weights sum to {total}, not 1.0")
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"profile {self.name!r} threshold outside [0, 1]")


COMPOSITE_V2: Final = ScoringProfile(
    name="composite-v2",
    intent=0.4,
    keyword=0.3,
    semantic=0.2,
    category=0.1,
    threshold=0.25,
)

PROFILES: Final[Dict[str, ScoringProfile]] = {
    p.name: p
    for p in (
        COMPOSITE_V2,
        replace(COMPOSITE_V2, name="composite-v2-strict", threshold=0.30),
        # Plain keyword / word-overlap matcher without intent or category signals.
        ScoringProfile(
            name="overlap-v1",
            intent=0.0,
            keyword=0.7,
            semantic=0.3,
            category=0.0,
            threshold=0.30,
        ),
    )
}


def get_profile(name: str, threshold: Optional[float] = None) -> ScoringProfile:
    """Look up a profile by name, optionally overriding its threshold."""
    try:
        profile = PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise ValueError(f"unknown matching profile {name!r} (known: {known})") from None
    if threshold is not None:
        profile = replace(profile, threshold=threshold)
    return profile
