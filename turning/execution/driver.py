"""Execution of the test case forest against an environment."""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable

from ..errors import SpawnContextError
from ..nodes import DefineNode, NodeKind, PathNode
from ..options import RunOptions
from ..search import PathStart, PathVia
from .environment import Environment
from .models import AfterEachData, ExecutionResult
from .reporter import Reporter

logger = logging.getLogger(__name__)

# Values for which identity says nothing about sharing state
_VALUE_TYPES = (type(None), bool, int, float, complex, str, bytes, tuple, frozenset)


async def call_handler(handler: Callable[..., Any], *args: Any) -> Any:
    """Call a sync or async handler and return its result."""
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def is_selected(test_case_id: str, filter_ids: list[str] | None) -> bool:
    """Check a test case id against filter ids.

    A case is selected when it is one of the filter ids, one of their
    ancestors (so that the path leading to them runs) or one of their
    descendants.
    """
    if filter_ids is None:
        return True

    for filter_id in filter_ids:
        if (
            test_case_id == filter_id
            or filter_id.startswith(test_case_id + ".")
            or test_case_id.startswith(filter_id + ".")
        ):
            return True

    return False


class ExecutionDriver:
    """Runs test cases depth-first, one step at a time.

    Every step transits the context through the node's handler, runs the
    tests of all current states concurrently, then the node's own test. A
    case whose steps fail is retried up to ``max_attempts`` times; once its
    spawned sub-cases have run it is never retried, so they never run twice.
    """

    def __init__(
        self,
        define_nodes: Mapping[str, DefineNode],
        environment: Environment | None = None,
        options: RunOptions | None = None,
        reporter: Reporter | None = None,
    ):
        self.define_nodes = define_nodes
        self.environment = environment if environment is not None else Environment()
        self.options = options if options is not None else RunOptions()
        self.reporter = reporter if reporter is not None else Reporter(self.options.verbose)

    async def run(self, path_initializes: list[PathStart]) -> ExecutionResult:
        """Run every selected test case between ``setup`` and ``teardown``.

        Errors raised by environment hooks propagate; ``teardown`` still runs.

        Args:
            path_initializes: Roots of the test case forest.

        Returns:
            The ids of passed and failed test cases.
        """
        result = ExecutionResult()
        list_only = self.options.list_only

        if not list_only:
            await self.environment.setup()

        try:
            await self._run_cases(path_initializes, 0, None, None, result)
        finally:
            if not list_only:
                await self.environment.teardown()

        self.reporter.summary(result.failed_test_case_ids)

        logger.debug(
            "Ran %d test cases, %d failed",
            len(result.passed_test_case_ids) + len(result.failed_test_case_ids),
            len(result.failed_test_case_ids),
        )

        return result

    async def _run_cases(
        self,
        starts: list[PathStart],
        depth: int,
        parent_id: str | None,
        parent_context: Any,
        result: ExecutionResult,
    ) -> bool:
        """Run sibling test cases; return False if any of them failed."""
        all_passed = True

        for index, start in enumerate(starts, 1):
            test_case_id = f"{parent_id}.{index}" if parent_id else str(index)

            if not is_selected(test_case_id, self.options.filter):
                continue

            if self.options.list_only:
                await self._list_case(start, test_case_id, depth, result)
                continue

            if not await self._run_case(start, test_case_id, depth, parent_context, result):
                all_passed = False

            if result.bailed:
                break

        return all_passed

    async def _run_case(
        self,
        start: PathStart,
        test_case_id: str,
        depth: int,
        parent_context: Any,
        result: ExecutionResult,
    ) -> bool:
        turns, spawns = start.split()
        max_attempts = self.options.max_attempts

        self.reporter.case(test_case_id, depth)

        for attempt in range(1, max_attempts + 1):
            if depth == 0:
                await self.environment.before()

            context, passed = await self._run_steps([start, *turns], depth + 1, parent_context)

            spawned = False
            if passed and spawns:
                spawned = True
                passed = await self._run_cases(spawns, depth + 1, test_case_id, context, result)

            await self.environment.after_each(
                context, AfterEachData(test_case_id, attempt, passed, spawned)
            )

            if depth == 0:
                await self.environment.after()

            if passed or spawned:
                break

            if attempt < max_attempts:
                logger.debug("Test case %s failed on attempt %d", test_case_id, attempt)
                self.reporter.retry(test_case_id, attempt, max_attempts, depth + 1)

        if passed:
            result.passed_test_case_ids.append(test_case_id)
        elif not spawned:
            # Failed sub-cases report their own ids
            result.failed_test_case_ids.append(test_case_id)

        if not passed and self.options.bail:
            result.bailed = True

        return passed

    async def _list_case(
        self, start: PathStart, test_case_id: str, depth: int, result: ExecutionResult
    ) -> None:
        turns, spawns = start.split()

        self.reporter.case(test_case_id, depth)
        for link in [start, *turns]:
            self.reporter.step(link.name, link.states, depth + 1)

        if spawns:
            await self._run_cases(spawns, depth + 1, test_case_id, None, result)

    async def _run_steps(
        self, links: list[PathVia], depth: int, parent_context: Any
    ) -> tuple[Any, bool]:
        context = parent_context

        for link in links:
            self.reporter.step(link.name, link.states, depth)

            try:
                context = await self._transit(link.node, context)
            except Exception as e:
                self.reporter.failure("Transition failed", e, depth)
                return context, False

            if not await self._test_states(link.states, context, depth):
                return context, False

            if not await self._test_node(link.node, context, depth):
                return context, False

        return context, True

    async def _transit(self, node: PathNode, context: Any) -> Any:
        if node.kind is NodeKind.INITIALIZE:
            if node.handler is None:
                return None
            return await call_handler(node.handler, self.environment)

        if node.handler is None:
            return context

        next_context = await call_handler(node.handler, context, self.environment)

        if node.kind is NodeKind.SPAWN:
            if next_context is context and not isinstance(context, _VALUE_TYPES):
                raise SpawnContextError(
                    "Spawned context is not expected to have the same reference "
                    "as the parent context"
                )
            return next_context

        # A turn handler returning nothing keeps working on the same context
        return context if next_context is None else next_context

    async def _test_states(self, states: tuple[str, ...], context: Any, depth: int) -> bool:
        tested = []
        for state in states:
            define_node = self.define_nodes.get(state)
            if define_node is not None and define_node.test_handler is not None:
                tested.append((state, define_node.test_handler))

        outcomes = await asyncio.gather(
            *(call_handler(handler, context) for _, handler in tested),
            return_exceptions=True,
        )

        passed = True
        for (state, _), outcome in zip(tested, outcomes):
            if not isinstance(outcome, BaseException):
                continue
            if not isinstance(outcome, Exception):
                raise outcome

            passed = False
            self.reporter.failure(f'State "{state}" test failed', outcome, depth)

        return passed

    async def _test_node(self, node: PathNode, context: Any, depth: int) -> bool:
        if node.test_handler is None:
            return True

        try:
            await call_handler(node.test_handler, context)
        except Exception as e:
            self.reporter.failure("Transition test failed", e, depth)
            return False

        return True
