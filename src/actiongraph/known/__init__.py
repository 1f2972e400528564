"""Concrete interning caches, one per action graph section."""

from actiongraph.known.actions import KnownActions
from actiongraph.known.artifacts import KnownArtifacts
from actiongraph.known.aspects import KnownAspectDescriptors
from actiongraph.known.base import KnownCache
from actiongraph.known.caches import KnownCaches
from actiongraph.known.configurations import KnownConfigurations
from actiongraph.known.nested_sets import KnownNestedSets
from actiongraph.known.path_fragments import KnownPathFragments
from actiongraph.known.rule_classes import KnownRuleClassStrings
from actiongraph.known.targets import KnownRuleConfiguredTargets

__all__ = [
    "KnownActions",
    "KnownArtifacts",
    "KnownAspectDescriptors",
    "KnownCache",
    "KnownCaches",
    "KnownConfigurations",
    "KnownNestedSets",
    "KnownPathFragments",
    "KnownRuleClassStrings",
    "KnownRuleConfiguredTargets",
]
