from __future__ import annotations

import time
from typing import Any, Sequence

from application.executor.action_resolver import ActionResolver
from application.ports.logger import LoggerPort
from domain.codes import OutcomeCode
from domain.exceptions import UseCaseFailure
from domain.steps.declaration import StepDeclaration
from domain.steps.result import CONTINUE, Continue, Halt, StepResult


class StepExecutor:
    """Runs declarations in order until one halts or the list is exhausted."""

    def __init__(self, resolver: ActionResolver):
        self._resolver = resolver

    def execute(self, steps: Sequence[StepDeclaration], subject: Any, logger: LoggerPort) -> StepResult:
        for index, step in enumerate(steps):
            try:
                runnable = step.should_run(subject)
            except UseCaseFailure as failure:
                result: StepResult = Halt.from_failure(failure, step_name=step.name)
            else:
                if not runnable:
                    logger.debug("step.skipped", step=step.name, index=index)
                    continue
                result = self._execute_step(step, subject, logger, index)

            if isinstance(result, Halt):
                logger.info(
                    "step.halt",
                    step=step.name,
                    index=index,
                    success=result.success,
                    code=result.code,
                )
                return result

        return CONTINUE

    def _execute_step(self, step: StepDeclaration, subject: Any, logger: LoggerPort, index: int) -> StepResult:
        if step.is_success:
            return Halt.succeeded(step_name=step.name)

        if step.is_failure:
            return Halt.failed(
                code=step.options.get("code"),
                message=step.options.get("message"),
                step_name=step.name,
            )

        action = self._resolver.resolve(step.action, subject)

        logger.debug("step.start", step=step.name, index=index)
        t0 = time.perf_counter()

        try:
            value = action()
        except UseCaseFailure as failure:
            return Halt.from_failure(failure, step_name=step.name)
        finally:
            logger.debug(
                "step.end",
                step=step.name,
                index=index,
                elapsed_ms=int((time.perf_counter() - t0) * 1000),
            )

        return self._interpret(step, value)

    def _interpret(self, step: StepDeclaration, value: Any) -> StepResult:
        if isinstance(value, Halt):
            return value.at(step.name)
        if isinstance(value, Continue):
            return value
        if not value:
            return Halt.failed(
                code=OutcomeCode.STEP_FALSE,
                message=f"Step '{step.name}' returned false",
                step_name=step.name,
            )
        return CONTINUE
