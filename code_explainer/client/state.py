"""Result-pane state machine.

Each pane (explanation, execution) is an immutable ``PaneState`` value that
only changes through ``transition``. Results carry the generation of the
request that produced them, so a superseded request never overwrites the
state of a newer one.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class PaneStatus(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    SETTLED = "settled"


class Outcome(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class PaneState:
    status: PaneStatus = PaneStatus.IDLE
    outcome: Outcome | None = None
    text: str = ""
    generation: int = 0

    def __post_init__(self) -> None:
        if self.status is PaneStatus.SETTLED:
            if self.outcome is None:
                raise ValueError("a settled pane needs an outcome")
        elif self.outcome is not None or self.text:
            raise ValueError(f"a {self.status.value} pane cannot hold a result")

    @property
    def is_pending(self) -> bool:
        return self.status is PaneStatus.PENDING

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILURE


@dataclass(frozen=True, slots=True)
class Started:
    pass


@dataclass(frozen=True, slots=True)
class Succeeded:
    text: str
    generation: int


@dataclass(frozen=True, slots=True)
class Failed:
    text: str
    generation: int


PaneEvent = Started | Succeeded | Failed


def settle(outcome: Outcome, text: str, generation: int) -> Succeeded | Failed:
    if outcome is Outcome.SUCCESS:
        return Succeeded(text=text, generation=generation)
    return Failed(text=text, generation=generation)


def transition(state: PaneState, event: PaneEvent) -> PaneState:
    if isinstance(event, Started):
        if state.is_pending:
            return state
        # Prior content is dropped so it never sits next to an in-flight request.
        return PaneState(status=PaneStatus.PENDING, generation=state.generation + 1)

    if not state.is_pending or event.generation != state.generation:
        return state

    outcome = Outcome.SUCCESS if isinstance(event, Succeeded) else Outcome.FAILURE
    return replace(state, status=PaneStatus.SETTLED, outcome=outcome, text=event.text)


def display_text(state: PaneState, pending_label: str) -> str:
    if state.is_pending:
        return pending_label
    return state.text
