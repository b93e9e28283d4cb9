import pytest

from application.callable import Callable


class CallableImplBad(Callable):
    pass


class CallableImplGood(Callable):
    def __call__(self, *args, **kwargs):
        return (args, kwargs)


def test_call_and_perform_build_a_fresh_instance() -> None:
    assert CallableImplGood.call(1, key="v") == ((1,), {"key": "v"})
    assert CallableImplGood.perform(2) == ((2,), {})


def test_subclasses_have_to_implement_call() -> None:
    with pytest.raises(NotImplementedError):
        CallableImplBad.call()
