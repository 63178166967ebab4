"""Traffic-light diagnosis of the change between two periods."""

from __future__ import annotations

from enum import Enum

from utils.config import GREEN_BELOW_PCT, YELLOW_BELOW_PCT


class Diagnosis(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


def classify(prior: float | None, current: float | None) -> Diagnosis:
    """Map the change from *prior* to *current* onto green/yellow/red.

    Absent values and a zero prior give yellow: there is no meaningful
    percentage to judge.  Otherwise the magnitude of the relative change
    decides: below 10 % green, below 20 % yellow, else red.
    """
    if prior is None or current is None or prior == 0:
        return Diagnosis.YELLOW
    pct = abs(current - prior) / abs(prior) * 100
    if pct < GREEN_BELOW_PCT:
        return Diagnosis.GREEN
    if pct < YELLOW_BELOW_PCT:
        return Diagnosis.YELLOW
    return Diagnosis.RED
