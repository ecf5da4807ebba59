from __future__ import annotations

from dataclasses import dataclass

from .transitions import TransitionTable

__all__ = ["TableStats", "summarize"]


@dataclass(frozen=True)
class TableStats:
    """Size summary of a trained transition table."""

    order: int
    states: int
    transitions: int
    observations: int
    terminal_observations: int
    max_branching: int

    @property
    def mean_branching(self) -> float:
        if not self.states:
            return 0.0
        return self.transitions / self.states

    def describe(self) -> str:
        """Return a short, human-friendly summary string."""
        parts = [
            f"order={self.order}",
            f"states={self.states}",
            f"transitions={self.transitions}",
            f"observations={self.observations}",
            f"ends={self.terminal_observations}",
            f"branching={self.mean_branching:.2f}/max{self.max_branching}",
        ]
        return " ".join(parts)

    def to_event(self) -> dict[str, float | int]:
        """Serialize the summary into a JSON-friendly payload."""
        return {
            "order": self.order,
            "states": self.states,
            "transitions": self.transitions,
            "observations": self.observations,
            "terminal_observations": self.terminal_observations,
            "max_branching": self.max_branching,
            "mean_branching": round(self.mean_branching, 4),
        }


def summarize(table: TransitionTable) -> TableStats:
    transitions = 0
    observations = 0
    terminal = 0
    max_branching = 0
    for _state, distribution in table.items():
        transitions += len(distribution)
        observations += distribution.total()
        max_branching = max(max_branching, len(distribution))
        for target, count in distribution.items():
            if target.is_nothing:
                terminal += count
    return TableStats(
        order=table.order,
        states=len(table),
        transitions=transitions,
        observations=observations,
        terminal_observations=terminal,
        max_branching=max_branching,
    )
