"""
triage/state.py

TriageState TypedDict definition for the symptom triage LangGraph workflow.
"""

from typing import Optional, TypedDict

from gateway.schemas import SymptomAnalysis


class TriageState(TypedDict):
    """Shared state passed through the triage node pipeline."""

    # ── Input (validated before the graph runs) ──────────────
    symptoms: str

    # ── Inference outputs ────────────────────────────────────
    generated_text: Optional[str]  # None when the remote service failed

    # ── Interpreter outputs ──────────────────────────────────
    analysis: Optional[SymptomAnalysis]
