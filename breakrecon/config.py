from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReconcileSettings:
    tolerance_minutes: int = 5
    match_threshold: int = 80
    min_gap_minutes: int = 10
