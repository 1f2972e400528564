"""KnownActions: interns actions and everything they reference."""

from actiongraph.container import ActionGraphContainer
from actiongraph.domain import ActionSpec
from actiongraph.intern import InterningCache
from actiongraph.known.artifacts import KnownArtifacts
from actiongraph.known.aspects import KnownAspectDescriptors
from actiongraph.known.base import KnownCache
from actiongraph.known.configurations import KnownConfigurations
from actiongraph.known.nested_sets import KnownNestedSets
from actiongraph.known.targets import KnownRuleConfiguredTargets
from actiongraph.messages import Action, KeyValuePair


class KnownActions(KnownCache[ActionSpec, Action]):
    """Cache for actions.

    Builds the Action message by resolving the owning target, configuration,
    aspects, input nested set and outputs through the sibling caches.

    Args:
        include_artifacts: When False, inputs and outputs are left out and the
            artifact sections are not populated for this action.
        include_command_line: When False, arguments are left out.
    """

    def __init__(
        self,
        container: ActionGraphContainer,
        known_targets: KnownRuleConfiguredTargets,
        known_configurations: KnownConfigurations,
        known_aspect_descriptors: KnownAspectDescriptors,
        known_nested_sets: KnownNestedSets,
        known_artifacts: KnownArtifacts,
        include_artifacts: bool = True,
        include_command_line: bool = True,
    ) -> None:
        self.known_targets = known_targets
        self.known_configurations = known_configurations
        self.known_aspect_descriptors = known_aspect_descriptors
        self.known_nested_sets = known_nested_sets
        self.known_artifacts = known_artifacts
        self.include_artifacts = include_artifacts
        self.include_command_line = include_command_line
        self.cache = InterningCache(
            self._create_proto, container.actions, name="actions"
        )

    def _create_proto(self, action: ActionSpec, id: int) -> Action:
        configuration_id = None
        if action.configuration is not None:
            configuration_id = self.known_configurations.data_to_id(action.configuration)

        input_dep_set_ids: tuple[int, ...] = ()
        output_ids: tuple[int, ...] = ()
        primary_output_id = None
        if self.include_artifacts:
            if not action.inputs.is_empty():
                input_dep_set_ids = (self.known_nested_sets.data_to_id(action.inputs),)
            output_ids = tuple(
                self.known_artifacts.data_to_id(output) for output in action.outputs
            )
            if action.primary_output is not None:
                primary_output_id = self.known_artifacts.data_to_id(action.primary_output)

        return Action(
            id=id,
            target_id=self.known_targets.data_to_id(action.owner),
            action_key=action.action_key,
            mnemonic=action.mnemonic,
            configuration_id=configuration_id,
            aspect_descriptor_ids=tuple(
                self.known_aspect_descriptors.data_to_id(aspect)
                for aspect in action.aspects
            ),
            arguments=action.arguments if self.include_command_line else (),
            environment_variables=tuple(
                KeyValuePair(key=key, value=value) for key, value in action.environment
            ),
            input_dep_set_ids=input_dep_set_ids,
            output_ids=output_ids,
            primary_output_id=primary_output_id,
            execution_platform=action.execution_platform,
            discards_outputs=action.discards_outputs,
        )
