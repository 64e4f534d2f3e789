"""
triage/graph.py

LangGraph StateGraph definition for symptom triage.
Pipeline: Inference → (conditional) Parser | Fallback → END
"""

from langgraph.graph import END, StateGraph

from triage.nodes.inference import inference_node
from triage.nodes.interpreter import fallback_node, parser_node
from triage.state import TriageState


def build_graph() -> StateGraph:
    """
    Construct and compile the triage workflow.

    Flow:
    1. Inference: asks the hosted model for an analysis
    2. Parser: extracts labeled sections from the model output
       or Fallback: local knowledge base rules when the model gave nothing
    """
    graph = StateGraph(TriageState)

    graph.add_node("inference", inference_node)
    graph.add_node("parser", parser_node)
    graph.add_node("fallback", fallback_node)

    graph.set_entry_point("inference")

    graph.add_conditional_edges(
        "inference",
        lambda state: "parser" if state["generated_text"] else "fallback",
    )
    graph.add_edge("parser", END)
    graph.add_edge("fallback", END)

    return graph.compile()
