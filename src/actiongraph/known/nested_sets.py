"""KnownNestedSets: interns nested sets of artifacts as DepSetOfFiles."""

from actiongraph.container import ActionGraphContainer
from actiongraph.domain import NestedSet
from actiongraph.intern import InterningCache
from actiongraph.known.artifacts import KnownArtifacts
from actiongraph.known.base import KnownCache
from actiongraph.messages import DepSetOfFiles


class KnownNestedSets(KnownCache[NestedSet, DepSetOfFiles]):
    """Cache for nested sets.

    Transitive subsets are interned in this same cache and referenced by id,
    so a subset shared by many actions is written once. Empty subsets are
    dropped.

    ``data_to_id`` interns the unknown subsets of a set leaves first before
    the set itself. No dep set id is reserved while another is under
    construction, so ids are dense and every dep set is published after the
    dep sets it references, in id order.
    """

    def __init__(
        self,
        container: ActionGraphContainer,
        known_artifacts: KnownArtifacts,
    ) -> None:
        self.known_artifacts = known_artifacts
        self.cache = InterningCache(
            self._create_proto, container.dep_set_of_files, name="dep_set_of_files"
        )

    def data_to_id(self, data: NestedSet) -> int:
        for subset in self._unknown_subsets(data):
            self.cache.data_to_id(subset)
        return self.cache.data_to_id(data)

    def _unknown_subsets(self, nested_set: NestedSet) -> list[NestedSet]:
        """Non-empty subsets not interned yet, in post-order, without the root."""
        order: list[NestedSet] = []
        visited: set[int] = {id(nested_set)}
        stack = [(nested_set, iter(nested_set.transitive))]
        while stack:
            node, subsets = stack[-1]
            subset = next(subsets, None)
            if subset is None:
                stack.pop()
                if node is not nested_set:
                    order.append(node)
                continue
            if id(subset) in visited or subset.is_empty():
                continue
            visited.add(id(subset))
            if self.cache.lookup(subset) is None:
                stack.append((subset, iter(subset.transitive)))
        return order

    def _create_proto(self, nested_set: NestedSet, id: int) -> DepSetOfFiles:
        transitive_ids = tuple(
            self.cache.data_to_id(subset)
            for subset in nested_set.transitive
            if not subset.is_empty()
        )
        direct_ids = tuple(
            self.known_artifacts.data_to_id(artifact) for artifact in nested_set.direct
        )
        return DepSetOfFiles(
            id=id,
            direct_artifact_ids=direct_ids,
            transitive_dep_set_ids=transitive_ids,
        )
