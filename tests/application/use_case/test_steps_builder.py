import pytest

from application.use_case.steps import ComputedRecord, FieldRecord, Steps
from domain.exceptions import StepDefinitionError
from domain.steps.declaration import ConditionKind, InlineCallable, NamedMethod
from domain.validation import presence


class ExampleBehavior:
    def method_from_behavior(self, use_case):
        return True


def test_named_and_inline_steps_keep_declaration_order() -> None:
    action = lambda uc: True  # noqa: E731

    definition = Steps().step("do_things").step(action).step("labelled", action).build()

    assert definition.names == ("do_things", "inline", "labelled")
    assert definition.steps[0].action == NamedMethod("do_things")
    assert definition.steps[1].action == InlineCallable(action)
    # inline action wins; the name is only a label
    assert definition.steps[2].action == InlineCallable(action)


def test_step_without_name_or_action_is_rejected() -> None:
    with pytest.raises(StepDefinitionError):
        Steps().step()


def test_conditions_are_attached() -> None:
    definition = Steps().step("guarded", if_=lambda uc: True, unless=lambda uc: False).build()

    kinds = [c.kind for c in definition.steps[0].conditions]
    assert kinds == [ConditionKind.IF, ConditionKind.UNLESS]


def test_non_callable_condition_is_rejected() -> None:
    with pytest.raises(StepDefinitionError):
        Steps().step("guarded", if_=True)


def test_success_and_failure_steps() -> None:
    definition = (
        Steps()
        .success(if_=lambda uc: True)
        .failure("access_denied", message="No permission")
        .failure(code="keyword_code")
        .failure()
        .build()
    )

    success, denied, keyword, generic = definition.steps
    assert success.is_success
    assert denied.is_failure
    assert dict(denied.options) == {"code": "access_denied", "message": "No permission"}
    assert keyword.options["code"] == "keyword_code"
    assert generic.options["code"] == "failure"
    assert generic.options["message"] is None


def test_step_with_reserved_names_builds_control_steps() -> None:
    definition = Steps().step("success").step("failure", code="nope", message="Nope").build()

    assert definition.steps[0].is_success
    assert definition.steps[1].is_failure
    assert definition.steps[1].options["code"] == "nope"


def test_record_strategy_last_write_wins() -> None:
    definition = Steps().record("order").record(lambda uc: "computed").build()

    assert isinstance(definition.record_strategy, ComputedRecord)

    definition = Steps().record(lambda uc: "computed").record("order").build()

    assert definition.record_strategy == FieldRecord("order")


def test_record_strategy_type_is_checked() -> None:
    with pytest.raises(StepDefinitionError):
        Steps().record(42)


def test_mix_in_instantiates_classes() -> None:
    definition = Steps().mix_in(ExampleBehavior).build()

    assert isinstance(definition.capabilities[0], ExampleBehavior)


def test_validate_accepts_only_rules() -> None:
    definition = Steps().validate(presence("order")).build()
    assert len(definition.rules) == 1

    with pytest.raises(StepDefinitionError):
        Steps().validate("order")


def test_build_appends_to_parent_unless_disabled() -> None:
    parent = Steps().step("first").validate(presence("order")).record("order").build()

    child = Steps().step("second").build(parent)
    fresh = Steps(inherit=False).step("second").build(parent)

    assert child.names == ("first", "second")
    assert len(child.rules) == 1
    assert child.record_strategy == FieldRecord("order")
    assert fresh.names == ("second",)
    assert fresh.rules == ()
    assert fresh.record_strategy is None


def test_builder_is_frozen_after_build() -> None:
    builder = Steps().step("first")
    builder.build()

    with pytest.raises(StepDefinitionError):
        builder.step("second")
