"""Pydantic models for search and run options."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


def default_random_seed() -> str:
    """Today's date, e.g. ``"Sun Oct 18 2026"``, so cases change daily but not per run."""
    return date.today().strftime("%a %b %d %Y")


class SearchOptions(BaseModel):
    """Options of the path search."""

    model_config = ConfigDict(extra="forbid")

    allow_unreachable: bool = False
    min_transition_search_count: int = Field(default=10, ge=1)
    random_seed: str | int = Field(default_factory=default_random_seed)


class RunOptions(SearchOptions):
    """Options of a search followed by the execution of its cases."""

    bail: bool = False
    filter: list[str] | None = None
    verbose: bool = False
    list_only: bool = False
    max_attempts: int = Field(default=1, ge=1)
