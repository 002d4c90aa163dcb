"""Pydantic models for Turning model files."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Name of the patterns applied to every transition not opting out
DEFAULT_PATTERN = "default"

MatchItem = str | dict[str, str]


def _as_list(value):
    if isinstance(value, (str, dict)):
        return [value]
    return value


class StateDefinition(BaseModel):
    """A defined state."""

    model_config = ConfigDict(extra="forbid")

    name: str
    only: bool = False
    necessary: bool = False


class NodeDefinition(BaseModel):
    """Settings shared by initialize nodes and transitions."""

    model_config = ConfigDict(extra="forbid")

    alias: str | None = None
    description: str | None = None
    depth: int | None = Field(default=None, ge=0)
    manual: bool = False
    only: bool = False
    block: list[str] = Field(default_factory=list)


class InitializeDefinition(NodeDefinition):
    """An initialize node."""

    states: list[str]

    @model_validator(mode="before")
    @classmethod
    def normalize_states(cls, data):
        if isinstance(data, dict) and "states" in data:
            data["states"] = _as_list(data["states"])
        return data


class TransitionDefinition(NodeDefinition):
    """A turn or a spawn, written ``turn: [patterns]`` or ``spawn: [patterns]``."""

    kind: Literal["turn", "spawn"]
    patterns: list[str]
    to: list[str]
    pattern: str | bool | None = None
    match: MatchItem | list[MatchItem] | None = None
    matches: list[MatchItem | list[MatchItem]] | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_transition(cls, data):
        """Turn the ``turn``/``spawn`` key into ``kind`` and ``patterns``."""
        if not isinstance(data, dict):
            return data

        kinds = [kind for kind in ("turn", "spawn") if kind in data]
        if len(kinds) != 1:
            raise ValueError("a transition needs exactly one of 'turn' or 'spawn'")

        kind = kinds[0]
        data["kind"] = kind
        data["patterns"] = _as_list(data.pop(kind))

        if "to" in data:
            data["to"] = _as_list(data["to"])

        return data


class TurningModel(BaseModel):
    """Root model of a Turning YAML file."""

    model_config = ConfigDict(extra="forbid")

    states: list[StateDefinition] = Field(default_factory=list)
    patterns: dict[str, list[MatchItem]] = Field(default_factory=dict)
    initialize: list[InitializeDefinition] = Field(default_factory=list)
    transitions: list[TransitionDefinition] = Field(default_factory=list)
    cases: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_model(cls, data):
        """Allow plain strings for states and patterns."""
        if not isinstance(data, dict):
            return data

        states = data.get("states")
        if isinstance(states, list):
            data["states"] = [
                {"name": state} if isinstance(state, str) else state for state in states
            ]

        patterns = data.get("patterns")
        if isinstance(patterns, dict):
            data["patterns"] = {name: _as_list(value) for name, value in patterns.items()}

        return data

    @model_validator(mode="after")
    def check_unique_states(self):
        names = [state.name for state in self.states]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"states defined more than once: {', '.join(duplicates)}")
        return self
