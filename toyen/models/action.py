"""
Build action models.

A Rule is a reusable command template; a BuildAction binds one rule to
concrete outputs, inputs and argument values.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass(frozen=True)
class Rule:
    """A parameterized shell command shared by many build actions."""

    name: str
    command: str = ""
    description: str = ""
    params: tuple[str, ...] = ()
    generator: bool = False
    depfile: str | None = None

    @property
    def is_phony(self) -> bool:
        return self.name == "phony"


PHONY = Rule(name="phony")


class BuildAction(BaseModel):
    """One compiled unit of work handed to the emission layer."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    rule: Rule
    outputs: list[str] = Field(min_length=1, description="Files or phony names produced")
    inputs: list[str] = Field(default_factory=list, description="Positional inputs ($in)")
    implicits: list[str] = Field(default_factory=list, description="Dependencies not passed as $in")
    order_only: list[str] = Field(default_factory=list, description="Must exist before running")
    args: dict[str, str] = Field(default_factory=dict, description="Values for the rule's params")
    optional: bool = Field(default=False, description="Left out of the default target set")

    @model_validator(mode="after")
    def _check_args(self) -> BuildAction:
        unknown = sorted(set(self.args) - set(self.rule.params))
        if unknown:
            raise ValueError(f"rule '{self.rule.name}' does not accept args: {', '.join(unknown)}")
        return self

    @model_validator(mode="after")
    def _check_paths(self) -> BuildAction:
        for section in ("outputs", "inputs", "implicits", "order_only"):
            if "" in getattr(self, section):
                raise ValueError(f"rule '{self.rule.name}' action has an empty path in {section}")
        return self

    @property
    def is_directory_creation(self) -> bool:
        return self.rule.name == "mkdir"
