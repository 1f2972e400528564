"""KnownConfigurations: interns build configurations."""

from actiongraph.container import ActionGraphContainer
from actiongraph.domain import BuildConfiguration
from actiongraph.intern import InterningCache
from actiongraph.known.base import KnownCache
from actiongraph.messages import Configuration


class KnownConfigurations(KnownCache[BuildConfiguration, Configuration]):
    def __init__(self, container: ActionGraphContainer) -> None:
        self.cache = InterningCache(
            self._create_proto, container.configuration, name="configuration"
        )

    def _create_proto(self, config: BuildConfiguration, id: int) -> Configuration:
        return Configuration(
            id=id,
            mnemonic=config.mnemonic,
            platform_name=config.platform_name,
            checksum=config.checksum,
            is_tool=config.is_tool,
        )
