"""KnownArtifacts: interns artifacts."""

from actiongraph import messages
from actiongraph.container import ActionGraphContainer
from actiongraph.domain import Artifact
from actiongraph.intern import InterningCache
from actiongraph.known.base import KnownCache
from actiongraph.known.path_fragments import KnownPathFragments


class KnownArtifacts(KnownCache[Artifact, messages.Artifact]):
    """Cache for artifacts; the exec path is stored as a path fragment id."""

    def __init__(
        self,
        container: ActionGraphContainer,
        known_path_fragments: KnownPathFragments,
    ) -> None:
        self.known_path_fragments = known_path_fragments
        self.cache = InterningCache(
            self._create_proto, container.artifacts, name="artifacts"
        )

    def _create_proto(self, artifact: Artifact, id: int) -> messages.Artifact:
        return messages.Artifact(
            id=id,
            path_fragment_id=self.known_path_fragments.data_to_id(artifact.exec_path),
            is_tree_artifact=artifact.is_tree_artifact,
        )
