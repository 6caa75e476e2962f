"""EventBus membership and delivery."""

import pytest

from app.core.auth import create_token_for
from app.core.errors import AuthenticationError, EventPayloadError
from app.realtime.bus import Event, EventBus, JOB_EXPIRED, NEW_APPLICATION
from tests.conftest import drain


@pytest.fixture
def event_bus():
    return EventBus()


def test_connect_joins_role_and_identity_groups(event_bus):
    connection = event_bus.connect(create_token_for(5, "HR"))

    assert connection.groups == {"HR", "user-5"}
    assert event_bus.members("HR") == {connection.id}
    assert event_bus.members("user-5") == {connection.id}
    assert event_bus.members("USER") == frozenset()
    assert event_bus.connection_count == 1


def test_rejected_credential_registers_nothing(event_bus):
    with pytest.raises(AuthenticationError):
        event_bus.connect("garbage")
    with pytest.raises(AuthenticationError):
        event_bus.connect(None)

    assert event_bus.connection_count == 0
    assert event_bus.members("HR") == frozenset()


def test_publish_reaches_every_connection(event_bus):
    hr = event_bus.connect(create_token_for(1, "HR"))
    user = event_bus.connect(create_token_for(2, "USER"))

    delivered = event_bus.publish(JOB_EXPIRED, {"jobId": 9})

    assert delivered == 2
    for connection in (hr, user):
        [event] = drain(connection)
        assert event.to_message() == {"event": "job-expired", "data": {"jobId": 9}}


def test_publish_with_no_listeners_is_dropped(event_bus):
    assert event_bus.publish(NEW_APPLICATION, {"jobId": 1}) == 0

    late = event_bus.connect(create_token_for(1, "HR"))
    assert drain(late) == []


def test_publish_to_group_only_reaches_members(event_bus):
    owner = event_bus.connect(create_token_for(1, "HR"))
    other_hr = event_bus.connect(create_token_for(2, "HR"))
    user = event_bus.connect(create_token_for(3, "USER"))

    assert event_bus.publish_to("user-1", NEW_APPLICATION, {"jobId": 4}) == 1
    assert len(drain(owner)) == 1
    assert drain(other_hr) == []
    assert drain(user) == []

    assert event_bus.publish_to("HR", JOB_EXPIRED, {"jobId": 4}) == 2
    assert event_bus.publish_to("nobody", JOB_EXPIRED, {"jobId": 4}) == 0


def test_same_user_on_two_sockets_gets_both(event_bus):
    token = create_token_for(1, "HR")
    first = event_bus.connect(token)
    second = event_bus.connect(token)

    assert event_bus.members("user-1") == {first.id, second.id}
    assert event_bus.publish_to("user-1", NEW_APPLICATION, {}) == 2


def test_disconnect_is_idempotent(event_bus):
    connection = event_bus.connect(create_token_for(1, "USER"))

    event_bus.disconnect(connection)
    event_bus.disconnect(connection)

    assert event_bus.connection_count == 0
    assert event_bus.members("USER") == frozenset()
    assert event_bus.members("user-1") == frozenset()
    assert event_bus.publish(JOB_EXPIRED, {"jobId": 1}) == 0
    assert not connection.deliver(Event(JOB_EXPIRED, {}))


def test_events_keep_publish_order(event_bus):
    connection = event_bus.connect(create_token_for(1, "HR"))
    for job_id in range(3):
        event_bus.publish(JOB_EXPIRED, {"jobId": job_id})

    assert [e.payload["jobId"] for e in drain(connection)] == [0, 1, 2]


def test_full_outbox_drops_event():
    small_bus = EventBus(outbox_size=1)
    connection = small_bus.connect(create_token_for(1, "HR"))

    assert small_bus.publish(JOB_EXPIRED, {"jobId": 1}) == 1
    assert small_bus.publish(JOB_EXPIRED, {"jobId": 2}) == 0
    assert [e.payload["jobId"] for e in drain(connection)] == [1]


def test_unserializable_payload_rejected(event_bus):
    event_bus.connect(create_token_for(1, "HR"))

    with pytest.raises(EventPayloadError):
        event_bus.publish(JOB_EXPIRED, {"when": object()})
