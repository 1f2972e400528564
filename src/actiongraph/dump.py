"""ActionGraphDump: walks configured targets and actions into a container."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from actiongraph.container import ActionGraphContainer
from actiongraph.domain import ActionSpec, RuleConfiguredTarget
from actiongraph.filters import ActionFilter
from actiongraph.known.caches import KnownCaches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DumpOptions:
    """Options controlling what a dump contains.

    Attributes:
        include_artifacts: Write action inputs and outputs (and with them the
            artifact, dep set and path fragment sections).
        include_command_line: Write action arguments.
        action_filter: Optional CEL expression; only actions for which it
            evaluates to true are written. See actiongraph.filters.
    """

    include_artifacts: bool = True
    include_command_line: bool = True
    action_filter: str | None = None


class ActionGraphDump:
    """Producer side of one serialization run.

    Owns the output container and the KnownCaches writing into it. Callers
    hand it targets and actions in any order, any number of times; every
    distinct object is written exactly once and referenced by id afterwards.
    """

    def __init__(
        self,
        options: DumpOptions | None = None,
        container: ActionGraphContainer | None = None,
    ) -> None:
        """Initialize ActionGraphDump.

        Args:
            options: Dump options. Defaults to DumpOptions().
            container: Container to fill. Defaults to a new, empty one.

        Raises:
            ValueError: If options.action_filter does not compile.
        """
        self.options = options or DumpOptions()
        self.container = container if container is not None else ActionGraphContainer()
        self.caches = KnownCaches.create(
            self.container,
            include_artifacts=self.options.include_artifacts,
            include_command_line=self.options.include_command_line,
        )
        self._filter = (
            ActionFilter(self.options.action_filter)
            if self.options.action_filter is not None
            else None
        )

    def dump_configured_target(self, target: RuleConfiguredTarget) -> int:
        """Write a configured target (and its rule class) and return its id."""
        return self.caches.targets.data_to_id(target)

    def dump_action(self, action: ActionSpec) -> int | None:
        """Write an action and everything it references.

        Returns:
            The action id, or None when the action filter excludes it.
        """
        if self._filter is not None and not self._filter.matches(action):
            logger.debug("Action %s filtered out", action.action_key)
            return None
        return self.caches.actions.data_to_id(action)

    def dump_actions(
        self, actions: Iterable[ActionSpec], max_workers: int = 1
    ) -> list[int | None]:
        """Write many actions, optionally from a thread pool.

        With max_workers == 1 actions are written in iteration order and ids
        are reproducible. With more workers every action is still written
        exactly once, but id assignment follows scheduling order.

        Returns:
            One entry per input action, in input order (see dump_action).
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        if max_workers == 1:
            return [self.dump_action(action) for action in actions]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.dump_action, actions))

    def build(self) -> ActionGraphContainer:
        """Return the filled container."""
        logger.debug("Dump finished: %r", self.container)
        return self.container
