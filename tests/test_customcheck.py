import json

from zora.customcheck import CustomCheck, CustomCheckSpec
from zora.meta import ConditionStatus, ObjectMeta


def _check(params=None):
    return CustomCheck(
        metadata=ObjectMeta(name="mycheck", generation=2),
        spec=CustomCheckSpec(message="msg", severity="Low", params=params),
    )


def test_file_name():
    assert _check().file_name() == "mycheck.yaml"


def test_get_params_object():
    raw = '{"labels": ["app", "team"], "limit": 3}'
    assert _check(raw).get_params() == json.loads(raw)


def test_get_params_bytes():
    raw = b'{"key": "value"}'
    assert _check(raw).get_params() == {"key": "value"}


def test_get_params_absent():
    assert _check().get_params() is None


def test_get_params_invalid_or_not_object():
    assert _check("{not json").get_params() is None
    assert _check("[1, 2]").get_params() is None


def test_set_ready_status_true():
    check = _check()
    check.set_ready_status(True, "CustomCheckReconciled", "custom check successfully configured")
    cond = check.status.get_condition("Ready")
    assert cond.status == ConditionStatus.TRUE
    assert cond.reason == "CustomCheckReconciled"
    assert cond.observed_generation == check.metadata.generation
    assert check.status.condition_is_true("Ready")


def test_set_ready_status_false_replaces():
    check = _check()
    check.set_ready_status(True, "CustomCheckReconciled", "ok")
    check.set_ready_status(False, "CompileError", "bad expression")
    assert not check.status.condition_is_true("Ready")
    assert len(check.status.conditions) == 1
    assert check.status.get_condition("Ready").message == "bad expression"