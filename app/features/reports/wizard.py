"""
Report wizard state machine.

The wizard collects a report draft in four steps:

    DETAILS -> SCOPE -> QUESTIONS -> REVIEW

Each step owns one schema covering only its fields. Moving forward validates
the current step against the accumulated draft; REVIEW validates the whole
draft, which then maps onto a generate request. Data from other steps is
ignored, so a failed step never discards what the user already entered.
"""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import Field, ValidationError, model_validator

from app.features.reports.schemas import QuestionAnswer, ReportGenerateRequest
from app.schemas.common import BaseSchema


class WizardStep(str, Enum):
    DETAILS = "DETAILS"
    SCOPE = "SCOPE"
    QUESTIONS = "QUESTIONS"
    REVIEW = "REVIEW"


STEP_ORDER: tuple[WizardStep, ...] = (
    WizardStep.DETAILS,
    WizardStep.SCOPE,
    WizardStep.QUESTIONS,
    WizardStep.REVIEW,
)


class DetailsStep(BaseSchema):
    report_title: str = Field(..., min_length=5, max_length=500)


class ScopeStep(BaseSchema):
    client_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    included_waste_type_ids: list[str] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date > self.end_date:
            raise ValueError("Start date must be on or before end date")
        return self


class WizardQuestion(BaseSchema):
    id: str | None = None
    text: str = Field(..., min_length=1)
    answer_text: str | None = None


class QuestionsStep(BaseSchema):
    """Answers are optional; the step may also be skipped with no questions."""

    questions: list[WizardQuestion] = []


class ReportDraft(DetailsStep, ScopeStep, QuestionsStep):
    """Aggregate wizard state, complete once REVIEW validates."""

    def to_generate_request(self) -> ReportGenerateRequest:
        return ReportGenerateRequest(
            client_id=self.client_id,
            start_date=self.start_date,
            end_date=self.end_date,
            report_title=self.report_title,
            included_waste_type_ids=self.included_waste_type_ids,
            questions=[
                QuestionAnswer(question_text=q.text, answer_text=q.answer_text)
                for q in self.questions
            ],
        )


STEP_SCHEMAS: dict[WizardStep, type[BaseSchema]] = {
    WizardStep.DETAILS: DetailsStep,
    WizardStep.SCOPE: ScopeStep,
    WizardStep.QUESTIONS: QuestionsStep,
    WizardStep.REVIEW: ReportDraft,
}


class FieldError(BaseSchema):
    field: str
    message: str


class WizardValidateRequest(BaseSchema):
    step: WizardStep
    data: dict[str, Any] = {}


class WizardValidation(BaseSchema):
    valid: bool
    step: WizardStep
    next_step: WizardStep | None = None
    errors: list[FieldError] = []
    payload: ReportGenerateRequest | None = Field(
        None, description="Generate request built from the draft, set when REVIEW passes"
    )


def next_step(step: WizardStep) -> WizardStep | None:
    """Step after ``step``; None after REVIEW."""
    idx = STEP_ORDER.index(step)
    return STEP_ORDER[idx + 1] if idx + 1 < len(STEP_ORDER) else None


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        message = err["msg"].removeprefix("Value error, ")
        errors.append(FieldError(field=field, message=message))
    return errors


def validate_step(step: WizardStep, data: dict[str, Any]) -> WizardValidation:
    """
    Validate the fields owned by ``step`` within the accumulated ``data``.

    Returns the next step on success, or the field errors and no next step.
    """
    try:
        validated = STEP_SCHEMAS[step].model_validate(data)
    except ValidationError as e:
        return WizardValidation(valid=False, step=step, errors=_field_errors(e))

    payload = validated.to_generate_request() if isinstance(validated, ReportDraft) else None
    return WizardValidation(valid=True, step=step, next_step=next_step(step), payload=payload)
