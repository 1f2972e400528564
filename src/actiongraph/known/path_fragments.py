"""KnownPathFragments: interns exec paths one segment at a time."""

from actiongraph.container import ActionGraphContainer
from actiongraph.intern import InterningCache
from actiongraph.known.base import KnownCache
from actiongraph.messages import PathFragment


def _check_path(path: str) -> None:
    if not path:
        raise ValueError("Path cannot be empty")
    if path.startswith("/"):
        raise ValueError(f"Path must be relative: {path!r}")
    for segment in path.split("/"):
        if segment in ("", ".", ".."):
            raise ValueError(f"Path is not normalized: {path!r}")


class KnownPathFragments(KnownCache[str, PathFragment]):
    """Cache for path fragments.

    ``bazel-out/k8/bin/a.jar`` becomes four fragments, each pointing at its
    parent directory. Unknown parent directories are interned outermost
    first, before the path itself, so a parent always has a smaller id than
    its children and is published before them.
    """

    def __init__(self, container: ActionGraphContainer) -> None:
        self.cache = InterningCache(
            self._create_proto, container.path_fragments, name="path_fragments"
        )

    def data_to_id(self, data: str) -> int:
        _check_path(data)
        unknown = []
        parent = data.rpartition("/")[0]
        while parent and self.cache.lookup(parent) is None:
            unknown.append(parent)
            parent = parent.rpartition("/")[0]
        for path in reversed(unknown):
            self.cache.data_to_id(path)
        return self.cache.data_to_id(data)

    def _create_proto(self, path: str, id: int) -> PathFragment:
        _check_path(path)
        parent, sep, label = path.rpartition("/")
        parent_id = self.cache.data_to_id(parent) if sep else None
        return PathFragment(id=id, label=label, parent_id=parent_id)
