"""KnownRuleConfiguredTargets: interns configured targets."""

from actiongraph.container import ActionGraphContainer
from actiongraph.domain import RuleConfiguredTarget
from actiongraph.intern import InterningCache
from actiongraph.known.base import KnownCache
from actiongraph.known.rule_classes import KnownRuleClassStrings
from actiongraph.messages import Target


class KnownRuleConfiguredTargets(KnownCache[RuleConfiguredTarget, Target]):
    """Cache for rule configured targets in the action graph.

    The rule class name is interned through KnownRuleClassStrings. Targets
    without a rule class leave ``rule_class_id`` unset.
    """

    def __init__(
        self,
        container: ActionGraphContainer,
        known_rule_class_strings: KnownRuleClassStrings,
    ) -> None:
        self.known_rule_class_strings = known_rule_class_strings
        self.cache = InterningCache(
            self._create_proto, container.targets, name="targets"
        )

    def _create_proto(self, target: RuleConfiguredTarget, id: int) -> Target:
        rule_class_id = None
        if target.rule_class_string:
            rule_class_id = self.known_rule_class_strings.data_to_id(
                target.rule_class_string
            )
        return Target(id=id, label=str(target.label), rule_class_id=rule_class_id)
