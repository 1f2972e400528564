"""Example: Deduplicating a Java build's action graph.

Builds a chain of java_library targets where every library compiles against
all the libraries before it. Each Javac action's inputs are a nested set that
contains the previous library's inputs, so the same jars and dep sets are
reachable from many actions. The dump writes each of them once and refers to
them by id.
"""

import argparse

from actiongraph import ActionGraphDump, ContainerValidator, DumpOptions, dump_container
from actiongraph.domain import (
    ActionSpec,
    Artifact,
    BuildConfiguration,
    Label,
    NestedSet,
    RuleConfiguredTarget,
)


def build_actions(count: int) -> list[ActionSpec]:
    config = BuildConfiguration(
        mnemonic="k8-fastbuild",
        platform_name="k8",
        options=(("compilation_mode", "fastbuild"), ("cpu", "k8")),
    )
    actions = []
    classpath = NestedSet()
    for i in range(count):
        owner = RuleConfiguredTarget(
            label=Label(package="java/app", name=f"lib{i}"),
            rule_class_string="java_library",
        )
        source = Artifact(f"java/app/Lib{i}.java")
        jar = Artifact(f"bazel-out/k8-fastbuild/bin/java/app/liblib{i}.jar")
        inputs = NestedSet(direct=(source,), transitive=(classpath,))
        actions.append(
            ActionSpec(
                owner=owner,
                mnemonic="Javac",
                action_key=f"javac-lib{i}",
                configuration=config,
                arguments=("javac", "-d", jar.exec_path, source.exec_path),
                inputs=inputs,
                outputs=(jar,),
                primary_output=jar,
            )
        )
        classpath = NestedSet(direct=(jar,), transitive=(classpath,))
    return actions


def main():
    parser = argparse.ArgumentParser(description="Dump a deduplicated Java action graph")
    parser.add_argument(
        "--libraries",
        type=int,
        default=5,
        help="Number of chained java_library targets (default: 5)",
    )
    parser.add_argument(
        "--filter",
        type=str,
        default=None,
        help="CEL action filter, e.g. 'label.endsWith(\":lib0\")' (default: none)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker threads (default: 1, deterministic ids)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON dump instead of the summary",
    )
    args = parser.parse_args()

    actions = build_actions(args.libraries)
    dump = ActionGraphDump(DumpOptions(action_filter=args.filter))
    # Dump every action twice: the second pass must not add anything
    ids = dump.dump_actions(actions, max_workers=args.workers)
    dump.dump_actions(actions, max_workers=args.workers)
    container = dump.build()
    ContainerValidator().validate(container)

    if args.json:
        print(dump_container(container, indent=2))
        return

    print("=" * 60)
    print("Action graph dump")
    print(f"  Actions requested: {2 * len(actions)}")
    print(f"  Actions written: {sum(1 for i in ids if i is not None)}")
    for name, section in container.sections():
        print(f"  {name}: {len(section)}")

    print("\nCache Statistics:")
    for name, stats in dump.caches.stats().items():
        print(f"  {name}: hits={stats.hits} misses={stats.misses}")
    print("=" * 60)


if __name__ == "__main__":
    main()
