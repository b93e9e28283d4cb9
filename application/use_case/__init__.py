from application.outcome import Outcome
from application.use_case.steps import ComputedRecord, FieldRecord, Steps, StepsDefinition
from application.use_case.use_case import UseCase
from domain.codes import OutcomeCode
from domain.exceptions import UseCaseFailure
from domain.validation import length, presence, satisfies

__all__ = [
    "Outcome",
    "OutcomeCode",
    "Steps",
    "StepsDefinition",
    "FieldRecord",
    "ComputedRecord",
    "UseCase",
    "UseCaseFailure",
    "presence",
    "length",
    "satisfies",
]
