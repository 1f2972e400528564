"""KnownAspectDescriptors: interns aspect descriptors."""

from actiongraph import messages
from actiongraph.container import ActionGraphContainer
from actiongraph.domain import AspectDescriptor
from actiongraph.intern import InterningCache
from actiongraph.known.base import KnownCache


class KnownAspectDescriptors(KnownCache[AspectDescriptor, messages.AspectDescriptor]):
    """Cache for aspect descriptors."""

    def __init__(self, container: ActionGraphContainer) -> None:
        self.cache = InterningCache(
            self._create_proto,
            container.aspect_descriptors,
            name="aspect_descriptors",
        )

    def _create_proto(
        self, aspect: AspectDescriptor, id: int
    ) -> messages.AspectDescriptor:
        parameters = tuple(
            messages.KeyValuePair(key=key, value=value)
            for key, value in aspect.parameters
        )
        return messages.AspectDescriptor(id=id, name=aspect.name, parameters=parameters)
