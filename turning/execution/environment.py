"""Environment shared by every handler of a run."""

from typing import Any

from .models import AfterEachData


class Environment:
    """Lifecycle hooks around the execution of test cases.

    Subclass and override the hooks you need; all of them are no-ops by
    default. The same instance is handed to every initialize and transition
    handler, so it is also where shared resources (a browser, a client...)
    live between ``setup`` and ``teardown``.

    Hooks run in this order::

        setup -> [before -> test case -> after_each -> after]* -> teardown

    ``after_each`` also runs after every spawned sub-case.
    """

    async def setup(self) -> None:
        pass

    async def teardown(self) -> None:
        pass

    async def before(self) -> None:
        pass

    async def after(self) -> None:
        pass

    async def after_each(self, context: Any, data: AfterEachData) -> None:
        pass
