"""Assemble flat paths into the forest executed by the driver."""

from collections.abc import Iterable

from ..nodes import NodeKind
from .models import (
    ManualTestCase,
    Path,
    PathInitialize,
    PathStart,
    PathVia,
    create_link,
    path_signature,
)

CaseNameMap = dict[tuple[int, ...], list[str]]


def assemble_paths(
    paths: Iterable[Path],
    manual_cases: Iterable[ManualTestCase] = (),
) -> list[PathInitialize]:
    """Build the forest of test cases from sorted paths.

    Consecutive paths sharing a prefix are grouped under the same start as
    long as they only diverge where a spawn forks; a path diverging on a turn
    becomes a sibling test case. Links ending exactly where a manual case ends
    get that case's name.

    Args:
        paths: Sorted, deduplicated paths.
        manual_cases: Realized manual cases.

    Returns:
        The root links, one per top-level test case.
    """
    case_names: CaseNameMap = {}
    for case in manual_cases:
        case_names.setdefault(path_signature(case.steps), []).append(case.name)

    roots: list = []

    for path in paths:
        if path:
            _merge(roots, path, 0, case_names)

    return roots


def _merge(starts: list, path: Path, index: int, case_names: CaseNameMap) -> None:
    point = None
    if starts and starts[-1].node is path[index].node:
        point = _find_merge_point(starts[-1], path, index)

    if point is None:
        start = create_link(path[index])
        starts.append(start)
        _label(start, path, index, case_names)
        _extend(start, path, index + 1, case_names)
        return

    via, next_index, shared = point

    for shared_via, shared_index in shared:
        _label(shared_via, path, shared_index, case_names)

    if next_index == len(path):
        return

    if path[next_index].node.kind is NodeKind.SPAWN:
        if via.spawns is None:
            via.spawns = []
        _merge(via.spawns, path, next_index, case_names)
    else:
        _extend(via, path, next_index, case_names)


def _find_merge_point(
    start: PathStart, path: Path, index: int
) -> tuple[PathVia, int, list[tuple[PathVia, int]]] | None:
    """Walk the shared turn chain; None if the path cannot join this start."""
    via: PathVia = start
    shared: list[tuple[PathVia, int]] = [(start, index)]
    index += 1

    while index < len(path):
        node = path[index].node

        if node.kind is NodeKind.SPAWN:
            # Spawns only fork from the end of a turn chain
            if via.turn is not None:
                return None
            return via, index, shared

        if via.turn is not None and via.turn.node is node:
            via = via.turn
            shared.append((via, index))
            index += 1
            continue

        if via.turn is None and via.spawns is None:
            return via, index, shared

        return None

    return via, index, shared


def _extend(via: PathVia, path: Path, index: int, case_names: CaseNameMap) -> None:
    """Append the rest of a path below a terminal link."""
    while index < len(path):
        link = create_link(path[index])

        if link.node.kind is NodeKind.SPAWN:
            via.spawns = [link]
        else:
            via.turn = link

        via = link
        _label(via, path, index, case_names)
        index += 1


def _label(via: PathVia, path: Path, index: int, case_names: CaseNameMap) -> None:
    for name in case_names.get(path_signature(path[: index + 1]), ()):
        if name not in via.case_names:
            via.case_names.append(name)
