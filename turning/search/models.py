"""Data models for searched paths."""

from dataclasses import dataclass, field

from ..nodes import NodeKind, PathNode


@dataclass(frozen=True)
class PathStep:
    """One node on a path, with the states combination right after it."""

    node: PathNode
    states: tuple[str, ...]
    blocked: frozenset[str] = field(default_factory=frozenset, compare=False)


Path = tuple[PathStep, ...]


def path_signature(path: Path) -> tuple[int, ...]:
    """Node ids along a path, used to order and compare paths."""
    return tuple(step.node.id for step in path)


@dataclass
class ManualTestCase:
    """A path declared by alias, required verbatim in the output."""

    name: str
    nodes: list[PathNode]
    steps: Path = ()


@dataclass(eq=False)
class PathVia:
    """A link of the path forest.

    A link continues in place through ``turn`` or, at the end of a turn
    chain, forks into child ``spawns``.
    """

    node: PathNode
    states: tuple[str, ...]
    turn: "PathTurn | None" = None
    spawns: "list[PathSpawn] | None" = None
    case_names: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Node description, followed by the manual cases ending here."""
        name = self.node.description
        if self.case_names:
            name += f" <{', '.join(self.case_names)}>"
        return name

    def split(self) -> tuple[list["PathTurn"], list["PathSpawn"] | None]:
        """Get the turn chain following this link and the spawns ending it."""
        turns: list[PathTurn] = []
        via: PathVia = self

        while via.turn is not None:
            via = via.turn
            turns.append(via)

        return turns, via.spawns

    def iter_links(self):
        """Iterate over this link and every link below it, depth first."""
        yield self
        if self.turn is not None:
            yield from self.turn.iter_links()
        for spawn in self.spawns or ():
            yield from spawn.iter_links()


class PathStart(PathVia):
    """A link starting a test case: an initialize or a spawn."""


class PathInitialize(PathStart):
    """Root of a test case."""


class PathSpawn(PathStart):
    """Child test case forked from the end of its parent's turn chain."""


class PathTurn(PathVia):
    """In-place transition continuing a test case."""


def create_link(step: PathStep) -> PathVia:
    """Create the forest link matching the kind of a step's node."""
    kind = step.node.kind

    if kind is NodeKind.INITIALIZE:
        return PathInitialize(step.node, step.states)
    if kind is NodeKind.SPAWN:
        return PathSpawn(step.node, step.states)
    if kind is NodeKind.TURN:
        return PathTurn(step.node, step.states)

    raise ValueError(f"Unexpected node kind on a path: {kind}")


@dataclass
class SearchResult:
    """Result of a search."""

    path_initializes: list[PathInitialize] = field(default_factory=list)
    paths: list[Path] = field(default_factory=list)
    reached_states: set[str] = field(default_factory=set)
    reached_nodes: set[PathNode] = field(default_factory=set)
    blocked_edges: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total_cases(self) -> int:
        """Number of test cases, counting spawned sub-cases."""
        total = 0
        for root in self.path_initializes:
            total += sum(
                1 for link in root.iter_links() if link.node.kind is not NodeKind.TURN
            )
        return total
