"""Pytest configuration and fixtures."""

import pytest

from actiongraph.container import ActionGraphContainer
from actiongraph.domain import (
    ActionSpec,
    Artifact,
    BuildConfiguration,
    Label,
    NestedSet,
    RuleConfiguredTarget,
)
from actiongraph.known import KnownCaches
from actiongraph.sink import SectionSink


@pytest.fixture
def sink():
    """Create an empty SectionSink."""
    return SectionSink("values")


@pytest.fixture
def container():
    """Create an empty ActionGraphContainer."""
    return ActionGraphContainer()


@pytest.fixture
def caches(container):
    """Create a full KnownCaches set writing into the container fixture."""
    return KnownCaches.create(container)


@pytest.fixture
def config():
    """A fastbuild target configuration."""
    return BuildConfiguration(
        mnemonic="k8-fastbuild",
        platform_name="k8",
        options=(("compilation_mode", "fastbuild"),),
    )


@pytest.fixture
def javac_action(config):
    """A Javac action compiling one source file into a jar."""
    owner = RuleConfiguredTarget(Label("java/app", "lib"), "java_library")
    source = Artifact("java/app/Lib.java")
    jar = Artifact("bazel-out/k8-fastbuild/bin/java/app/liblib.jar")
    return ActionSpec(
        owner=owner,
        mnemonic="Javac",
        action_key="javac-lib",
        configuration=config,
        arguments=("javac", "-d", jar.exec_path, source.exec_path),
        environment=(("LANG", "en_US.UTF-8"),),
        inputs=NestedSet(direct=(source,)),
        outputs=(jar,),
        primary_output=jar,
    )
