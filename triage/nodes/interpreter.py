"""
triage/nodes/interpreter.py

Node 2: Interpreter.
parser_node turns the remote model's free text into a SymptomAnalysis,
filling any section the model left out from the local rules.
fallback_node runs the local rules alone.
"""

import re

import structlog

from gateway.schemas import SymptomAnalysis
from triage.rules import (
    MAX_RECOMMENDATIONS,
    advice_for,
    assess_severity,
    classify,
    fallback_analysis,
    normalize,
    recommendations_for,
)
from triage.state import TriageState

logger = structlog.get_logger(__name__)

MAX_PARSED_ITEMS: int = 3
DEFAULT_PARSED_CONDITION: str = "General symptoms"

# A labeled section runs until the next "|" separator, the next label, or the end
_SECTION_END = r"(?=\||\b(?:CONDITIONS?|RECOMMENDATIONS?|ADVICE)\s*:|$)"
_CONDITIONS_RE = re.compile(r"CONDITIONS?\s*:\s*(.+?)" + _SECTION_END, re.IGNORECASE | re.DOTALL)
_RECOMMENDATIONS_RE = re.compile(
    r"RECOMMENDATIONS?\s*:\s*(.+?)" + _SECTION_END, re.IGNORECASE | re.DOTALL
)
_ADVICE_RE = re.compile(r"ADVICE\s*:\s*(.+?)" + _SECTION_END, re.IGNORECASE | re.DOTALL)
_LIST_SPLIT_RE = re.compile(r"[,;]")


def _split_items(section: str) -> list[str]:
    items = [item.strip() for item in _LIST_SPLIT_RE.split(section)]
    return [item for item in items if item][:MAX_PARSED_ITEMS]


def _severity_from_text(generated_text: str, symptoms: str) -> str:
    lowered = generated_text.lower()
    if "severe" in lowered or "emergency" in lowered:
        return "severe"
    if "mild" in lowered or "minor" in lowered:
        return "mild"
    return assess_severity(symptoms)


def parse_generated_text(generated_text: str, symptoms: str) -> SymptomAnalysis:
    """Extract labeled sections from model output; gaps come from the local rules."""
    normalized = normalize(symptoms)

    match = _CONDITIONS_RE.search(generated_text)
    if match:
        conditions = _split_items(match.group(1))
    else:
        conditions = classify(normalized).conditions
    if not conditions:
        conditions = [DEFAULT_PARSED_CONDITION]

    match = _RECOMMENDATIONS_RE.search(generated_text)
    recommendations = _split_items(match.group(1)) if match else []
    if not recommendations:
        recommendations = recommendations_for(normalized)

    severity = _severity_from_text(generated_text, normalized)

    match = _ADVICE_RE.search(generated_text)
    advice = match.group(1).strip() if match else ""
    if not advice:
        advice = advice_for(normalized, severity)

    return SymptomAnalysis(
        possible_conditions=conditions,
        recommendations=recommendations[:MAX_RECOMMENDATIONS],
        severity=severity,
        advice=advice,
        source="remote",
    )


async def parser_node(state: TriageState) -> dict:
    analysis = parse_generated_text(state["generated_text"], state["symptoms"])
    logger.info(
        "triage_parsed",
        severity=analysis.severity,
        conditions=len(analysis.possible_conditions),
    )
    return {"analysis": analysis}


async def fallback_node(state: TriageState) -> dict:
    analysis = fallback_analysis(state["symptoms"])
    logger.info("triage_fallback", severity=analysis.severity)
    return {"analysis": analysis}
