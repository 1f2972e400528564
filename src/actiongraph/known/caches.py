"""KnownCaches: the wired set of caches for one dump run."""

from __future__ import annotations

from dataclasses import dataclass

from actiongraph.container import ActionGraphContainer
from actiongraph.intern import InternStats
from actiongraph.known.actions import KnownActions
from actiongraph.known.artifacts import KnownArtifacts
from actiongraph.known.aspects import KnownAspectDescriptors
from actiongraph.known.configurations import KnownConfigurations
from actiongraph.known.nested_sets import KnownNestedSets
from actiongraph.known.path_fragments import KnownPathFragments
from actiongraph.known.rule_classes import KnownRuleClassStrings
from actiongraph.known.targets import KnownRuleConfiguredTargets


@dataclass(frozen=True)
class KnownCaches:
    """Every concrete cache of one run, all writing into the same container.

    Create one per serialization run with ``KnownCaches.create`` and pass it
    down the traversal; caches are never shared between runs.
    """

    container: ActionGraphContainer
    rule_classes: KnownRuleClassStrings
    targets: KnownRuleConfiguredTargets
    path_fragments: KnownPathFragments
    artifacts: KnownArtifacts
    nested_sets: KnownNestedSets
    configurations: KnownConfigurations
    aspect_descriptors: KnownAspectDescriptors
    actions: KnownActions

    @classmethod
    def create(
        cls,
        container: ActionGraphContainer,
        include_artifacts: bool = True,
        include_command_line: bool = True,
    ) -> KnownCaches:
        """Build and wire all caches against container."""
        rule_classes = KnownRuleClassStrings(container)
        targets = KnownRuleConfiguredTargets(container, rule_classes)
        path_fragments = KnownPathFragments(container)
        artifacts = KnownArtifacts(container, path_fragments)
        nested_sets = KnownNestedSets(container, artifacts)
        configurations = KnownConfigurations(container)
        aspect_descriptors = KnownAspectDescriptors(container)
        actions = KnownActions(
            container,
            targets,
            configurations,
            aspect_descriptors,
            nested_sets,
            artifacts,
            include_artifacts=include_artifacts,
            include_command_line=include_command_line,
        )
        return cls(
            container=container,
            rule_classes=rule_classes,
            targets=targets,
            path_fragments=path_fragments,
            artifacts=artifacts,
            nested_sets=nested_sets,
            configurations=configurations,
            aspect_descriptors=aspect_descriptors,
            actions=actions,
        )

    def stats(self) -> dict[str, InternStats]:
        """Interning statistics per cache, keyed by cache name."""
        return {
            known.cache.name: known.stats
            for known in (
                self.rule_classes,
                self.targets,
                self.path_fragments,
                self.artifacts,
                self.nested_sets,
                self.configurations,
                self.aspect_descriptors,
                self.actions,
            )
        }
