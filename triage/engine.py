"""
triage/engine.py

Entry point for symptom analysis.
Validates input before anything leaves the process, runs the triage graph,
and guarantees a complete result even if a node fails unexpectedly.
"""

import structlog

from gateway.schemas import SymptomAnalysis
from triage.rules import fallback_analysis

logger = structlog.get_logger(__name__)


class InvalidSymptomInput(ValueError):
    """Symptom text is empty or whitespace only."""


async def analyze_symptoms(symptoms: str) -> SymptomAnalysis:
    """
    Produce a best-effort triage for free-text symptoms.

    Raises InvalidSymptomInput for blank input; never raises for
    remote service failures.
    """
    from triage.graph import build_graph

    if not symptoms or not symptoms.strip():
        raise InvalidSymptomInput("Please describe your symptoms")

    initial_state = {
        "symptoms": symptoms,
        "generated_text": None,
        "analysis": None,
    }

    try:
        graph = build_graph()
        final_state = await graph.ainvoke(initial_state)
        analysis = final_state.get("analysis")
    except Exception as exc:
        logger.error("triage_graph_failed", error=str(exc), fallback="rule_based")
        analysis = None

    if analysis is None:
        analysis = fallback_analysis(symptoms)

    logger.info(
        "triage_complete",
        source=analysis.source,
        severity=analysis.severity,
    )
    return analysis
