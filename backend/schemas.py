"""
Pydantic v2 models for the questionnaire, its answers and the assessment record.

JSON output mirrors the camelCase contract consumed by the presentation layer
(inScope, reportingType, legalBasis, ...). Python code uses snake_case names;
dump with `model_dump(by_alias=True)` to get the wire shape.
"""

from __future__ import annotations

from typing import Callable, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enum-like Literals
# ---------------------------------------------------------------------------

Answers = Mapping[str, str]
AnswerPredicate = Callable[[Answers], bool]

Framework = Literal["ungps", "oecd", "csrd", "taxonomy", "csddd"]
FRAMEWORKS: tuple[Framework, ...] = ("ungps", "oecd", "csrd", "taxonomy", "csddd")

Wave = Literal[1, 2, 3]
ReportingType = Literal["consolidated", "individual", "third_country_group_level"]
Exemption = Literal[
    "individual_reporting",
    "subsidiary_exemption_19a9",
    "subsidiary_exemption_29a8",
    "opt_out_fy2028_2029",
    "third_country_consolidated_alternative",
]
BulletStatus = Literal["met", "not_met", "info"]
InputType = Literal["select"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def _always(_answers: Answers) -> bool:
    return True


# ---------------------------------------------------------------------------
# 1. Question catalog
# ---------------------------------------------------------------------------

class StaticText(_Frozen):
    text: str

    def render(self, answers: Answers) -> str:
        return self.text


class DerivedText(_Frozen):
    """Text computed from the current answers (e.g. EU vs non-EU wording)."""

    derive: Callable[[Answers], str]

    def render(self, answers: Answers) -> str:
        return self.derive(answers)


Text = Union[StaticText, DerivedText]


class QuestionOption(_Frozen):
    value: str
    label: str


class Question(_Frozen):
    key: str
    label: Text
    type: InputType = "select"
    options: tuple[QuestionOption, ...]
    required: bool = True
    show_if: AnswerPredicate = _always
    help: Optional[Text] = None

    def is_visible(self, answers: Answers) -> bool:
        return self.show_if(answers)

    def option_values(self) -> frozenset[str]:
        return frozenset(option.value for option in self.options)


class QuestionGroup(_Frozen):
    id: str
    title: str
    questions: tuple[Question, ...]
    show_if: AnswerPredicate = _always

    def is_visible(self, answers: Answers) -> bool:
        return self.show_if(answers)


# Rendered views: labels and help resolved against a concrete answer set.

class RenderedQuestion(_Frozen):
    key: str
    label: str
    type: InputType
    options: list[QuestionOption]
    required: bool
    help: Optional[str] = None
    answer: Optional[str] = None


class RenderedStep(_Frozen):
    id: str
    title: str
    questions: list[RenderedQuestion]


# ---------------------------------------------------------------------------
# 2. Assessment results
# ---------------------------------------------------------------------------

class Finding(_Frozen):
    """One evaluated criterion. satisfied=None marks an informational clause."""

    criterion: str
    value: str
    requirement_note: Optional[str] = None
    satisfied: Optional[bool] = None


class PhaseIn(_Frozen):
    type: str
    current: str
    future: Optional[str] = None
    additional: Optional[str] = None


class TaxonomyDetails(_Frozen):
    kpis: tuple[str, ...]
    objectives: tuple[str, ...]
    phase_in: Optional[PhaseIn] = None


class AssessmentResult(_Frozen):
    in_scope: bool
    reason: str
    timeline: str = ""
    wave: Optional[Wave] = None
    reporting_type: Optional[ReportingType] = None
    legal_basis: Optional[str] = None
    automatic_exemptions: tuple[Exemption, ...] = ()
    possible_exemptions: tuple[Exemption, ...] = ()
    nfrd_transition: Optional[bool] = None
    specialized_timing: Optional[bool] = None
    details: Optional[TaxonomyDetails] = None
    future_considerations: Optional[str] = None
    note: Optional[str] = None
    consecutive_years_note: Optional[str] = None
    findings: tuple[Finding, ...] = ()
    pathway: Optional[str] = None


class Assessment(_Frozen):
    ungps: AssessmentResult
    oecd: AssessmentResult
    csrd: AssessmentResult
    taxonomy: AssessmentResult
    csddd: AssessmentResult

    def get(self, framework: Framework) -> AssessmentResult:
        return getattr(self, framework)

    def to_json_dict(self) -> dict:
        """camelCase record with unset optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# 3. Presentation
# ---------------------------------------------------------------------------

class Bullet(_Frozen):
    label: str
    value: str
    status: BulletStatus = "info"


class FrameworkSummary(_Frozen):
    framework: Framework
    name: str
    description: str
    details: str
    in_scope: bool
    status_label: str
    reason: str
    bullets: list[Bullet] = Field(default_factory=list)
    timeline: Optional[str] = None
    legal_basis: Optional[str] = None
    reporting_type_label: Optional[str] = None
    automatic_exemption_labels: list[str] = Field(default_factory=list)
    possible_exemption_labels: list[str] = Field(default_factory=list)
    future_considerations: Optional[str] = None
    note: Optional[str] = None


class ReportSection(_Frozen):
    title: str
    paragraphs: list[str]


class ReportSummary(_Frozen):
    frameworks: list[FrameworkSummary]
    sections: list[ReportSection] = Field(default_factory=list)
    disclaimer: str
