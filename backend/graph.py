"""
LangGraph state machine for the applicability assessment.

Graph topology:
  START → oecd_assessor → csrd_assessor → taxonomy_assessor → csddd_assessor
        → ungps_assessor → future_considerations → END

Node names carry a suffix because LangGraph forbids a node sharing its name
with a state key.

Every node is a thin wrapper around a pure assessor. Taxonomy must run after
CSRD because it consumes the CSRD verdict; future runs last because it
augments the not-in-scope verdicts of the earlier nodes.
"""

import logging
import time
from typing import Any, Callable, Mapping

from langgraph.graph import END, StateGraph

from assessors.csddd import assess_csddd
from assessors.csrd import assess_csrd
from assessors.future import add_future_considerations
from assessors.oecd import assess_oecd
from assessors.taxonomy import derive_taxonomy
from assessors.ungps import assess_ungps
from schemas import FRAMEWORKS, Assessment, AssessmentResult
from state import AssessmentState

logger = logging.getLogger("assessment")


def _run_node(agent: str, state: AssessmentState, compute: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    started_at = time.time()
    logs: list[dict] = list(state.get("logs") or [])
    pipeline_trace: list[dict] = list(state.get("pipeline_trace") or [])
    ts = lambda: int(time.time() * 1000)  # noqa: E731

    logs.append({"agent": agent, "msg": f"Assessing {agent}...", "ts": ts()})
    output = compute()

    for key, value in output.items():
        if isinstance(value, AssessmentResult):
            verdict = "in scope" if value.in_scope else "not in scope"
            logs.append({"agent": agent, "msg": f"{key}: {verdict}", "ts": ts()})
            logger.debug("%s: %s (%s)", key, verdict, value.pathway or "-")

    duration_ms = int((time.time() - started_at) * 1000)
    pipeline_trace.append({"agent": agent, "started_at": started_at, "ms": duration_ms})
    return {**output, "logs": logs, "pipeline_trace": pipeline_trace}


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

def oecd_node(state: AssessmentState) -> dict[str, Any]:
    return _run_node("oecd", state, lambda: {"oecd": assess_oecd(state["answers"])})


def csrd_node(state: AssessmentState) -> dict[str, Any]:
    return _run_node("csrd", state, lambda: {"csrd": assess_csrd(state["answers"])})


def taxonomy_node(state: AssessmentState) -> dict[str, Any]:
    return _run_node("taxonomy", state, lambda: {"taxonomy": derive_taxonomy(state["csrd"], state["answers"])})


def csddd_node(state: AssessmentState) -> dict[str, Any]:
    return _run_node("csddd", state, lambda: {"csddd": assess_csddd(state["answers"])})


def ungps_node(state: AssessmentState) -> dict[str, Any]:
    return _run_node("ungps", state, lambda: {"ungps": assess_ungps()})


def future_node(state: AssessmentState) -> dict[str, Any]:
    def compute() -> dict[str, Any]:
        augmented = add_future_considerations(assessment_from_state(state), state["answers"])
        return {"csrd": augmented.csrd, "csddd": augmented.csddd, "taxonomy": augmented.taxonomy}
    return _run_node("future", state, compute)


def assessment_from_state(state: AssessmentState) -> Assessment:
    return Assessment(
        ungps=state["ungps"],
        oecd=state["oecd"],
        csrd=state["csrd"],
        taxonomy=state["taxonomy"],
        csddd=state["csddd"],
    )


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------

workflow = StateGraph(AssessmentState)

workflow.add_node("oecd_assessor", oecd_node)
workflow.add_node("csrd_assessor", csrd_node)
workflow.add_node("taxonomy_assessor", taxonomy_node)
workflow.add_node("csddd_assessor", csddd_node)
workflow.add_node("ungps_assessor", ungps_node)
workflow.add_node("future_considerations", future_node)

workflow.set_entry_point("oecd_assessor")

workflow.add_edge("oecd_assessor", "csrd_assessor")
workflow.add_edge("csrd_assessor", "taxonomy_assessor")
workflow.add_edge("taxonomy_assessor", "csddd_assessor")
workflow.add_edge("csddd_assessor", "ungps_assessor")
workflow.add_edge("ungps_assessor", "future_considerations")
workflow.add_edge("future_considerations", END)

graph = workflow.compile()


def run_assessment(answers: Mapping[str, str]) -> AssessmentState:
    """Invoke the graph and return the final state, including logs and trace."""
    initial: AssessmentState = {"answers": dict(answers), "logs": [], "pipeline_trace": []}
    return graph.invoke(initial)


def assess(answers: Mapping[str, str]) -> Assessment:
    """Assess all five frameworks for one answer set."""
    final_state = run_assessment(answers)
    assessment = assessment_from_state(final_state)
    logger.info(
        "Assessment complete: %s",
        ", ".join(f"{name}={'yes' if getattr(assessment, name).in_scope else 'no'}"
                  for name in FRAMEWORKS),
    )
    return assessment
