"""
AssessmentState TypedDict: shared memory for all LangGraph nodes.

Each node reads from this dict and writes only to its own output keys.
`answers` is set once by run_assessment() before graph.invoke() and never modified.

Node order: oecd → csrd → taxonomy → csddd → ungps → future
"""

from __future__ import annotations

from typing import TypedDict

from schemas import AssessmentResult


class AssessmentState(TypedDict, total=False):
    # ── INIT: set by run_assessment() before invoke() ─────────────────────────
    answers: dict[str, str]     # question key -> option code
    logs: list[dict]            # Accumulates { agent, msg, ts } entries
    pipeline_trace: list[dict]  # Accumulates { agent, started_at, ms }

    # ── Framework verdicts, one key per node ────────────────────────────────
    oecd: AssessmentResult
    csrd: AssessmentResult
    taxonomy: AssessmentResult     # derived from csrd, never assessed alone
    csddd: AssessmentResult
    ungps: AssessmentResult

    # The future node re-writes csrd / csddd / taxonomy with growth notes.
