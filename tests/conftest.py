"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from turning import Turning
from turning.patterns import StatePatternMatcher


@pytest.fixture
def matcher() -> StatePatternMatcher:
    """Return a matcher with an empty cache."""
    return StatePatternMatcher()


@pytest.fixture
def promise_suite() -> Turning:
    """Return a suite where a pending promise either fulfills or rejects."""
    turning = Turning()

    turning.define("pending")
    turning.define("fulfilled")
    turning.define("rejected")

    turning.initialize(["pending"]).alias("create").by("creating a promise")
    turning.turn(["pending"]).to(["fulfilled"]).alias("resolve").by("resolving")
    turning.turn(["pending"]).to(["rejected"]).alias("reject").by("rejecting")

    return turning


@pytest.fixture
def promise_model_yaml() -> str:
    """Return the promise suite as a model file."""
    return """
states:
  - pending
  - fulfilled
  - rejected

initialize:
  - states: [pending]
    alias: create
    description: creating a promise

transitions:
  - turn: [pending]
    to: [fulfilled]
    alias: resolve
    description: resolving
  - turn: [pending]
    to: [rejected]
    alias: reject
    description: rejecting

cases:
  resolve-once: [create, resolve]
"""


@pytest.fixture
def write_model(tmp_path):
    """Return a function writing YAML text to a model file."""

    def write(content: str, name: str = "model.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return write
