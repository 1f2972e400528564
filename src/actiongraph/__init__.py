"""actiongraph: a deduplicated, cross-referenced action graph dump."""

from importlib.metadata import PackageNotFoundError, version

from actiongraph.container import ActionGraphContainer
from actiongraph.dump import ActionGraphDump, DumpOptions
from actiongraph.identity import IdentityTable
from actiongraph.intern import InternCycleError, InternStats, InterningCache
from actiongraph.known import KnownCaches
from actiongraph.protocol import Sink
from actiongraph.serialization import (
    container_digest,
    dump_container,
    dump_container_to_dict,
    load_container,
    load_container_from_dict,
)
from actiongraph.sink import SectionSink
from actiongraph.validation import ContainerValidator

try:
    __version__ = version("actiongraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = [
    "ActionGraphContainer",
    "ActionGraphDump",
    "ContainerValidator",
    "DumpOptions",
    "IdentityTable",
    "InternCycleError",
    "InternStats",
    "InterningCache",
    "KnownCaches",
    "SectionSink",
    "Sink",
    "container_digest",
    "dump_container",
    "dump_container_to_dict",
    "load_container",
    "load_container_from_dict",
    "__version__",
]
