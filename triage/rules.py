"""
triage/rules.py

Rule-based symptom triage used whenever the remote inference service is
unavailable, and to fill sections missing from a remote answer.

Conditions are resolved by an ordered rule list; the first rule that
matches wins, and DEFAULT applies when none does:
    1. EXACT              normalized input equals a knowledge base key
    2. LONGEST_SUBSTRING  a key contains the input or the input contains a key
    3. CATEGORY_KEYWORD   a body-area keyword appears in the input
    4. DEFAULT            generic condition
"""

from enum import IntEnum
from typing import Callable, NamedTuple, Optional

from gateway.schemas import SymptomAnalysis
from triage.knowledge import (
    CATEGORY_KEYWORDS,
    GENERIC_CONDITION,
    GENERIC_RECOMMENDATIONS,
    MILD_KEYWORDS,
    RECOMMENDATION_BUCKETS,
    SEVERE_KEYWORDS,
    SEVERITY_ADVICE,
    SYMPTOM_DATABASE,
    Severity,
    SymptomRecord,
)

MAX_RECOMMENDATIONS: int = 4


class MatchKind(IntEnum):
    EXACT = 1
    LONGEST_SUBSTRING = 2
    CATEGORY_KEYWORD = 3
    DEFAULT = 4


class RuleMatch(NamedTuple):
    kind: MatchKind
    conditions: list[str]
    key: Optional[str] = None
    record: Optional[SymptomRecord] = None


def normalize(text: str) -> str:
    return text.strip().lower()


def _exact(normalized: str) -> Optional[RuleMatch]:
    record = SYMPTOM_DATABASE.get(normalized)
    if record is None:
        return None
    return RuleMatch(MatchKind.EXACT, list(record.conditions), normalized, record)


def _longest_substring(normalized: str) -> Optional[RuleMatch]:
    candidates = [key for key in SYMPTOM_DATABASE if key in normalized or normalized in key]
    if not candidates:
        return None
    # max() keeps knowledge base order on equal lengths
    key = max(candidates, key=len)
    record = SYMPTOM_DATABASE[key]
    return RuleMatch(MatchKind.LONGEST_SUBSTRING, list(record.conditions), key, record)


def _category_keyword(normalized: str) -> Optional[RuleMatch]:
    for keyword, conditions in CATEGORY_KEYWORDS:
        if keyword in normalized:
            return RuleMatch(MatchKind.CATEGORY_KEYWORD, list(conditions))
    return None


def _default(normalized: str) -> RuleMatch:
    return RuleMatch(MatchKind.DEFAULT, [GENERIC_CONDITION])


CONDITION_RULES: tuple[Callable[[str], Optional[RuleMatch]], ...] = (
    _exact,
    _longest_substring,
    _category_keyword,
)


def classify(normalized: str) -> RuleMatch:
    """Run the condition rules in priority order; DEFAULT when none match."""
    for rule in CONDITION_RULES:
        match = rule(normalized)
        if match is not None:
            return match
    return _default(normalized)


def lookup_record(normalized: str) -> Optional[RuleMatch]:
    """Knowledge base match only (exact, then longest substring)."""
    return _exact(normalized) or _longest_substring(normalized)


def scan_severity(text: str) -> Optional[Severity]:
    """Severity implied by keywords in the text, or None when no keyword is present."""
    lowered = text.lower()
    if any(keyword in lowered for keyword in SEVERE_KEYWORDS):
        return "severe"
    if any(keyword in lowered for keyword in MILD_KEYWORDS):
        return "mild"
    return None


def assess_severity(text: str) -> Severity:
    return scan_severity(text) or "moderate"


def recommendations_for(normalized: str) -> list[str]:
    match = lookup_record(normalized)
    if match is not None:
        return list(match.record.recommendations[:MAX_RECOMMENDATIONS])
    for keywords, recommendations in RECOMMENDATION_BUCKETS:
        if any(keyword in normalized for keyword in keywords):
            return list(recommendations[:MAX_RECOMMENDATIONS])
    return list(GENERIC_RECOMMENDATIONS[:MAX_RECOMMENDATIONS])


def advice_for(normalized: str, severity: Severity) -> str:
    match = lookup_record(normalized)
    if match is not None:
        return match.record.advice
    return SEVERITY_ADVICE[severity]


def fallback_analysis(symptoms: str) -> SymptomAnalysis:
    """
    Deterministic triage from the local knowledge base.

    A knowledge base hit returns the record as stored. The keyword scan still
    runs on every input and overrides the record's severity only when the
    user's wording carries an explicit severity keyword ("mild headache").
    """
    normalized = normalize(symptoms)
    match = classify(normalized)
    scanned = scan_severity(normalized)

    if match.record is not None:
        return SymptomAnalysis(
            possible_conditions=list(match.record.conditions),
            recommendations=list(match.record.recommendations[:MAX_RECOMMENDATIONS]),
            severity=scanned or match.record.severity,
            advice=match.record.advice,
            source="fallback",
        )

    severity = scanned or "moderate"
    return SymptomAnalysis(
        possible_conditions=match.conditions,
        recommendations=recommendations_for(normalized),
        severity=severity,
        advice=advice_for(normalized, severity),
        source="fallback",
    )
