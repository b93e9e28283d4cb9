import pytest

from application.outcome import Outcome
from domain.codes import OutcomeCode
from domain.exceptions import UseCaseFailure
from domain.validation.errors import Errors


class TestOutcome:
    def test_create_success_outcome(self):
        outcome = Outcome(success=True, record="record")
        assert outcome.success is True
        assert outcome.failed is False
        assert outcome.code == "success"
        assert outcome.message is None
        assert outcome.exception is None
        assert outcome.record == "record"

    def test_success_code_ignores_given_code(self):
        outcome = Outcome(success=True, code="anything")
        assert outcome.code == OutcomeCode.SUCCESS

    def test_failure_defaults_to_generic_code(self):
        outcome = Outcome(success=False)
        assert outcome.failed is True
        assert outcome.code == "failure"

    def test_failure_code_is_normalized(self):
        outcome = Outcome(success=False, code=OutcomeCode.SAVE_FAILED)
        assert outcome.code == "save_failed"
        assert type(outcome.code) is str

    def test_code_falls_back_to_exception_code(self):
        outcome = Outcome(success=False, exception=UseCaseFailure("access_denied", "No permission"))
        assert outcome.code == "access_denied"

    def test_explicit_message_wins(self):
        outcome = Outcome(
            success=False,
            message="Explicit",
            exception=UseCaseFailure("x", "From exception"),
        )
        assert outcome.message == "Explicit"

    def test_message_falls_back_to_exception(self):
        outcome = Outcome(success=False, exception=UseCaseFailure("x", "From exception"))
        assert outcome.message == "From exception"

    def test_message_falls_back_to_validation_errors(self):
        errors = Errors()
        errors.add("title", "can't be blank")
        errors.add("author", "can't be blank")

        outcome = Outcome(success=False, errors=errors)

        assert outcome.message == "Title can't be blank, Author can't be blank"

    def test_outcome_frozen(self):
        outcome = Outcome(success=True)
        with pytest.raises(Exception):  # FrozenInstanceError
            outcome.success = False

    def test_errors_are_a_read_only_copy(self):
        errors = Errors()
        errors.add("title", "can't be blank")

        outcome = Outcome(success=False, errors=errors)
        errors.add("author", "can't be blank")

        assert outcome.errors.full_messages == ["Title can't be blank"]
        with pytest.raises(TypeError):
            outcome.errors.add("content", "can't be blank")
