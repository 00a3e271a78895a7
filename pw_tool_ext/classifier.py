"""
Date                    Author                          Change Details
17-10-2026              Debasish.P                      Locator Match Classification
"""
from typing import Iterable, List, Optional

from libs.dataclass.conceptual_objects import ElementRef, MatchOutcome, MatchResult


def _dedupe(matched: Iterable[ElementRef]) -> List[ElementRef]:
    unique: List[ElementRef] = []
    seen = set()
    for element in matched:
        if element in seen:
            continue
        seen.add(element)
        unique.append(element)
    return unique


def classify(matched: Iterable[ElementRef], reference: Optional[ElementRef]) -> MatchResult:
    """
    Classify what a locator matched against the snapshot reference element.
    Rules are checked in order and the first one wins; every combination lands on exactly one outcome.
    """
    elements = _dedupe(matched)
    count = len(elements)

    if reference is None:
        return MatchResult(MatchOutcome.NO_REFERENCE, count)
    if count == 0:
        return MatchResult(MatchOutcome.NO_MATCH, count)
    if count == 1 and elements[0] == reference:
        return MatchResult(MatchOutcome.EXACT_MATCH, count)
    if count > 1 and reference in elements:
        return MatchResult(MatchOutcome.AMBIGUOUS_MATCH, count)
    return MatchResult(MatchOutcome.WRONG_MATCH, count)
