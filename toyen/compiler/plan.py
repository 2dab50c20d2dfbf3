"""
Build plan: the complete, ordered set of compiled actions.

Tracks which module produced every output so that no output has two
producers. Identical directory-creation actions are the one exception:
several modules may ask for the same directory and share one action.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.exceptions import CollectedErrors, DuplicateOutputError, ToyenError
from ..models.action import BuildAction, Rule


@dataclass
class PlannedAction:
    owner: str
    action: BuildAction


@dataclass
class BuildPlan:
    """Actions in emission order plus an index of who produces what."""

    actions: list[PlannedAction] = field(default_factory=list)
    _producers: dict[str, PlannedAction] = field(default_factory=dict)
    errors: list[ToyenError] = field(default_factory=list)

    def add(self, owner: str, actions: list[BuildAction]) -> None:
        """Add one module's actions, recording conflicting outputs as errors."""
        for action in actions:
            self._add_one(owner, action)

    def _add_one(self, owner: str, action: BuildAction) -> None:
        repeated = sorted({out for out in action.outputs if action.outputs.count(out) > 1})
        for output in repeated:
            self.errors.append(
                DuplicateOutputError(
                    message=f"output '{output}' is listed twice by '{owner}'",
                    output=output,
                    modules=[owner],
                )
            )
        if repeated:
            return

        claimed: list[PlannedAction] = []
        for out in action.outputs:
            prev = self._producers.get(out)
            if prev is not None and all(prev is not c for c in claimed):
                claimed.append(prev)
        if claimed:
            if action.is_directory_creation and all(prev.action == action for prev in claimed):
                return
            for prev in claimed:
                output = next(out for out in action.outputs if out in prev.action.outputs)
                self.errors.append(
                    DuplicateOutputError(
                        message=(
                            f"output '{output}' is produced by both '{prev.owner}' and '{owner}'"
                        ),
                        output=output,
                        modules=[prev.owner, owner],
                    )
                )
            return

        planned = PlannedAction(owner=owner, action=action)
        self.actions.append(planned)
        for out in action.outputs:
            self._producers[out] = planned

    def check(self) -> None:
        """Raise every output conflict found so far.

        Raises:
            CollectedErrors: If any output has more than one producer.
        """
        if self.errors:
            raise CollectedErrors(message="conflicting build outputs", errors=list(self.errors))

    def rules(self) -> list[Rule]:
        """Distinct non-phony rules used by the plan, sorted by name."""
        seen: dict[str, Rule] = {}
        for planned in self.actions:
            rule = planned.action.rule
            if not rule.is_phony:
                seen.setdefault(rule.name, rule)
        return [seen[name] for name in sorted(seen)]

    def defaults(self) -> list[str]:
        """Outputs of every non-optional action, in emission order."""
        return [out for planned in self.actions if not planned.action.optional for out in planned.action.outputs]

    def producer_of(self, output: str) -> str | None:
        planned = self._producers.get(output)
        return planned.owner if planned else None

    def __len__(self) -> int:
        return len(self.actions)
