"""ContainerValidator: reference integrity checks for action graph dumps."""

from actiongraph.container import ActionGraphContainer
from actiongraph.messages import (
    Action,
    Artifact,
    DepSetOfFiles,
    PathFragment,
    Target,
)

# (message type, field name, referenced section); tuple fields hold many ids
_REFERENCES = (
    (Target, "rule_class_id", "rule_classes"),
    (PathFragment, "parent_id", "path_fragments"),
    (Artifact, "path_fragment_id", "path_fragments"),
    (DepSetOfFiles, "direct_artifact_ids", "artifacts"),
    (DepSetOfFiles, "transitive_dep_set_ids", "dep_set_of_files"),
    (Action, "target_id", "targets"),
    (Action, "configuration_id", "configuration"),
    (Action, "aspect_descriptor_ids", "aspect_descriptors"),
    (Action, "input_dep_set_ids", "dep_set_of_files"),
    (Action, "output_ids", "artifacts"),
    (Action, "primary_output_id", "artifacts"),
)


class ContainerValidator:
    """Checks that a container is internally consistent.

    Handles:
    - Duplicate ids within a section
    - References to ids missing from the referenced section
    - Cycles through transitive dep sets or parent path fragments
    """

    def validate(self, container: ActionGraphContainer) -> None:
        """Validate a container.

        Args:
            container: The container to check.

        Raises:
            ValueError: On duplicate ids, dangling references or cycles.
        """
        ids_by_section: dict[str, set[int]] = {}
        for name, sink in container.sections():
            seen: set[int] = set()
            for message in sink:
                if message.id in seen:
                    raise ValueError(f"Section '{name}' has duplicate id {message.id}")
                seen.add(message.id)
            ids_by_section[name] = seen

        for message_type, field_name, target_section in _REFERENCES:
            available = ids_by_section[target_section]
            for message in container.section(message_type.section):
                value = getattr(message, field_name)
                refs = value if isinstance(value, tuple) else (value,)
                for ref_id in refs:
                    if ref_id is not None and ref_id not in available:
                        raise ValueError(
                            f"{message_type.__name__} {message.id} field '{field_name}' "
                            f"references id {ref_id} missing from section "
                            f"'{target_section}'"
                        )

        dep_sets = {
            message.id: message.transitive_dep_set_ids
            for message in container.dep_set_of_files
        }
        if self._has_cycle(dep_sets):
            raise ValueError("Dep sets contain cycles")

        parents = {
            message.id: (() if message.parent_id is None else (message.parent_id,))
            for message in container.path_fragments
        }
        if self._has_cycle(parents):
            raise ValueError("Path fragments contain cycles")

    def _has_cycle(self, edges: dict[int, tuple[int, ...]]) -> bool:
        """Detect cycles using iterative DFS.

        Args:
            edges: Mapping of id -> ids it points at. Ids missing from the
                mapping are treated as leaves.

        Returns:
            True if cycle exists, False otherwise.
        """
        WHITE = 0  # Unvisited
        GRAY = 1  # Currently in DFS path
        BLACK = 2  # Fully processed

        color: dict[int, int] = {node: WHITE for node in edges}

        for start in edges:
            if color[start] != WHITE:
                continue
            color[start] = GRAY
            stack = [(start, iter(edges[start]))]
            while stack:
                node, children = stack[-1]
                child = next(children, None)
                if child is None:
                    color[node] = BLACK
                    stack.pop()
                    continue
                if child not in color:
                    continue
                if color[child] == GRAY:
                    # Back edge found - cycle detected
                    return True
                if color[child] == WHITE:
                    color[child] = GRAY
                    stack.append((child, iter(edges[child])))

        return False
