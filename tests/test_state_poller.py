import pytest

from ebs_resize.core.processors.state_poller import StatePoller
from ebs_resize.utils.exceptions import UnexpectedStateError, WaitTimeoutError


def scripted(*states):
    remaining = list(states)

    def fetch():
        return remaining.pop(0) if len(remaining) > 1 else remaining[0]

    return fetch


def test_waits_until_target_state():
    sleeps = []
    poller = StatePoller("volume", interval=30, sleep=sleeps.append)

    result = poller.wait_for(
        "vol-1", scripted("creating", "creating", "available"), targets=["available"]
    )

    assert result.final_state == "available"
    assert result.attempts == 3
    assert result.states_seen == ["creating", "available"]
    assert sleeps == [30, 30]


def test_target_on_first_poll_does_not_sleep():
    sleeps = []
    poller = StatePoller("instance stop", interval=5, sleep=sleeps.append)

    result = poller.wait_for("i-1", scripted("stopped"), targets=["stopped"])

    assert result.attempts == 1
    assert sleeps == []


def test_failure_state_is_fatal():
    poller = StatePoller("snapshot", interval=30, sleep=lambda _: None)

    with pytest.raises(UnexpectedStateError) as excinfo:
        poller.wait_for(
            "snap-1", scripted("pending", "error"), targets=["completed"], failures=["error"]
        )

    assert excinfo.value.resource_id == "snap-1"
    assert excinfo.value.state == "error"


def test_state_outside_transitional_set_is_fatal():
    poller = StatePoller("instance stop", interval=5, sleep=lambda _: None)

    with pytest.raises(UnexpectedStateError, match="unrecognized state 'terminated'"):
        poller.wait_for(
            "i-1",
            scripted("stopping", "terminated"),
            targets=["stopped"],
            transitional=["running", "stopping"],
        )


def test_without_transitional_set_any_state_keeps_waiting():
    poller = StatePoller("attach", interval=5, sleep=lambda _: None)

    result = poller.wait_for(
        "vol-1", scripted("detached", "attaching", "attached"), targets=["attached"]
    )

    assert result.attempts == 3


def test_deadline_raises_timeout():
    clock = {"now": 0.0}

    def sleep(seconds):
        clock["now"] += seconds

    poller = StatePoller(
        "snapshot", interval=30, timeout=60, sleep=sleep, clock=lambda: clock["now"]
    )

    with pytest.raises(WaitTimeoutError, match="within 60s"):
        poller.wait_for("snap-1", scripted("pending"), targets=["completed"])

    assert clock["now"] == 60


def test_state_of_and_describe_are_applied():
    snapshots = [{"state": "pending", "progress": "10%"}, {"state": "completed", "progress": "100%"}]
    described = []

    def describe(snapshot):
        described.append(snapshot["progress"])
        return snapshot["progress"]

    poller = StatePoller("snapshot", interval=30, sleep=lambda _: None)
    result = poller.wait_for(
        "snap-1",
        lambda: snapshots.pop(0),
        targets=["completed"],
        state_of=lambda snapshot: snapshot["state"],
        describe=describe,
    )

    assert result.value["progress"] == "100%"
    assert described == ["10%", "100%"]


def test_timeout_shorter_than_interval_still_polls_again():
    clock = {"now": 0.0}
    sleeps = []

    def sleep(seconds):
        sleeps.append(seconds)
        clock["now"] += seconds

    poller = StatePoller(
        "snapshot", interval=30, timeout=20, sleep=sleep, clock=lambda: clock["now"]
    )

    result = poller.wait_for("snap-1", scripted("pending", "completed"), targets=["completed"])

    assert result.attempts == 2
    assert sleeps == [20]

    clock["now"] = 0.0
    sleeps.clear()
    with pytest.raises(WaitTimeoutError):
        poller.wait_for("snap-1", scripted("pending"), targets=["completed"])
    assert sleeps == [20]
