"""KnownRuleClassStrings: interns rule class names."""

from actiongraph.container import ActionGraphContainer
from actiongraph.intern import InterningCache
from actiongraph.known.base import KnownCache
from actiongraph.messages import RuleClass


class KnownRuleClassStrings(KnownCache[str, RuleClass]):
    """Cache for rule class strings in the action graph."""

    def __init__(self, container: ActionGraphContainer) -> None:
        self.cache = InterningCache(
            self._create_proto, container.rule_classes, name="rule_classes"
        )

    def _create_proto(self, rule_class: str, id: int) -> RuleClass:
        return RuleClass(id=id, name=rule_class)
