from uuid import uuid4

import pytest

from memory_vault.core.errors import InvalidStateError
from memory_vault.domain.models.memory import MemoryStatus
from memory_vault.domain.state_machine import can_transition, ensure_transition, is_chat_ready

S = MemoryStatus


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (S.CREATED, S.PROCESSING),
        (S.BUILT, S.PROCESSING),
        (S.ERROR, S.PROCESSING),
        (S.PROCESSING, S.BUILT),
        (S.PROCESSING, S.ERROR),
    ],
)
def test_legal_transitions(current, target):
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (S.CREATED, S.BUILT),
        (S.CREATED, S.ERROR),
        (S.PROCESSING, S.PROCESSING),
        (S.BUILT, S.CREATED),
        (S.ERROR, S.CREATED),
        (S.PROCESSING, S.CREATED),
    ],
)
def test_illegal_transitions_raise_invalid_state(current, target):
    assert not can_transition(current, target)
    memory_id = uuid4()
    with pytest.raises(InvalidStateError) as exc_info:
        ensure_transition(current, target, memory_id)
    assert exc_info.value.details.current_status == current.value
    assert exc_info.value.details.memory_id == memory_id


def test_nothing_returns_to_created():
    assert not any(can_transition(status, S.CREATED) for status in S)


def test_only_built_is_chat_ready():
    assert [status for status in S if is_chat_ready(status)] == [S.BUILT]
