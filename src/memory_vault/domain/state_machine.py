"""Legal build status transitions of a memory."""

from uuid import UUID

from memory_vault.core.base import StateErrorDetails
from memory_vault.core.errors import InvalidStateError
from memory_vault.domain.models.memory import MemoryStatus

TRANSITIONS: dict[MemoryStatus, frozenset[MemoryStatus]] = {
    MemoryStatus.CREATED: frozenset({MemoryStatus.PROCESSING}),
    MemoryStatus.PROCESSING: frozenset({MemoryStatus.BUILT, MemoryStatus.ERROR}),
    MemoryStatus.BUILT: frozenset({MemoryStatus.PROCESSING}),
    MemoryStatus.ERROR: frozenset({MemoryStatus.PROCESSING}),
}


def can_transition(current: MemoryStatus, target: MemoryStatus) -> bool:
    return target in TRANSITIONS[current]


def ensure_transition(current: MemoryStatus, target: MemoryStatus, memory_id: UUID | None = None) -> None:
    """Raise InvalidStateError unless ``current -> target`` is allowed."""
    if can_transition(current, target):
        return
    raise InvalidStateError(
        f"Cannot move memory from {current.value} to {target.value}",
        details=StateErrorDetails(
            source="state_machine",
            operation="transition",
            memory_id=memory_id,
            action=f"transition_to_{target.value.lower()}",
            current_status=current.value,
            required_status=" or ".join(sorted(s.value for s in TRANSITIONS if target in TRANSITIONS[s])),
        ),
    )


def is_chat_ready(status: MemoryStatus) -> bool:
    """Chat only answers from memories whose index is built."""
    return status is MemoryStatus.BUILT
