"""BaseStage — shared constructor for pipeline stages.

Every stage receives the diagnostic logger at construction time instead of
reaching for module-level state, so one bound logger (carrying the target
directory and run context) flows through the whole invocation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


class BaseStage:
    """Base for loader, resolver, detector, generator, and invoker.

    Usage::

        class Resolver(BaseStage):
            def resolve(self, specs):
                self._log.debug("resolving", count=len(specs))
    """

    stage_name = "stage"

    def __init__(self, log: BoundLogger | None = None) -> None:
        base = log if log is not None else structlog.get_logger("routergen")
        self._log = base.bind(stage=self.stage_name)
