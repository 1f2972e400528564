"""Domain objects walked by the action graph dump.

These are the keys handed to the interning caches. All of them are frozen
dataclasses, so equality and hashing are structural: two objects built from
the same fields intern to the same id.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from actiongraph.hashing import hash_value


@dataclass(frozen=True)
class Label:
    """A build label, rendered as ``//package:name`` (``@repo//package:name``)."""

    package: str
    name: str
    repository: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Label name cannot be empty")
        if ":" in self.name:
            raise ValueError(f"Label name cannot contain ':': {self.name!r}")

    @classmethod
    def parse(cls, text: str) -> Label:
        """Parse ``[@repo]//package:name`` or ``//package`` (name = last segment)."""
        repository = ""
        if text.startswith("@"):
            repository, sep, text = text[1:].partition("//")
            if not sep:
                raise ValueError(f"Label must contain '//': {text!r}")
            text = "//" + text
        if not text.startswith("//"):
            raise ValueError(f"Label must start with '//': {text!r}")
        package, sep, name = text[2:].partition(":")
        if not sep:
            name = package.rsplit("/", 1)[-1]
        return cls(package=package, name=name, repository=repository)

    def __str__(self) -> str:
        prefix = f"@{self.repository}" if self.repository else ""
        return f"{prefix}//{self.package}:{self.name}"


@dataclass(frozen=True)
class RuleConfiguredTarget:
    """A configured target; rule_class_string is None for non-rule targets."""

    label: Label
    rule_class_string: str | None = None


@dataclass(frozen=True)
class BuildConfiguration:
    """A build configuration, identified by its options.

    Attributes:
        mnemonic: Short output directory name (e.g. "k8-fastbuild").
        platform_name: Target platform name.
        options: Pairs of option name -> value, stored sorted.
        is_tool: True for the exec (host tool) configuration.
    """

    mnemonic: str
    platform_name: str
    options: tuple[tuple[str, str], ...] = ()
    is_tool: bool = False

    def __post_init__(self) -> None:
        # Canonical order
        object.__setattr__(self, "options", tuple(sorted(self.options)))

    @property
    def checksum(self) -> str:
        """SHA-256 of the sorted options, repeated option names included."""
        return hash_value(self.options)


@dataclass(frozen=True)
class Artifact:
    """A file produced or consumed by actions, identified by its exec path."""

    exec_path: str
    is_tree_artifact: bool = False

    def __post_init__(self) -> None:
        if not self.exec_path:
            raise ValueError("Artifact exec_path cannot be empty")
        if self.exec_path.startswith("/"):
            raise ValueError(
                f"Artifact exec_path must be relative: {self.exec_path!r}"
            )


@dataclass(frozen=True, eq=False)
class NestedSet:
    """An immutable set of artifacts built from direct members and subsets.

    Two nested sets with the same direct members and the same transitive
    subsets (in the same order) are the same set for interning purposes.
    The hash is computed once from the subsets' stored hashes, and equality
    compares each pair of shared subsets once, so both stay linear in the
    number of distinct subsets however deep or shared the set is.
    """

    direct: tuple[Artifact, ...] = ()
    transitive: tuple[NestedSet, ...] = ()
    _hash: int = field(init=False, repr=False)
    _empty: bool = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_hash", hash((self.direct, self.transitive)))
        object.__setattr__(
            self,
            "_empty",
            not self.direct and all(subset._empty for subset in self.transitive),
        )

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, NestedSet):
            return NotImplemented
        pending = [(self, other)]
        compared: set[tuple[int, int]] = set()
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            pair = (id(left), id(right))
            if pair in compared:
                continue
            compared.add(pair)
            if (
                left._hash != right._hash
                or left.direct != right.direct
                or len(left.transitive) != len(right.transitive)
            ):
                return False
            pending.extend(zip(left.transitive, right.transitive))
        return True

    def __repr__(self) -> str:
        return (
            f"NestedSet(direct={self.direct!r}, "
            f"transitive=<{len(self.transitive)} subsets>)"
        )

    def is_empty(self) -> bool:
        return self._empty

    def to_list(self) -> list[Artifact]:
        """Flatten in post-order (transitive sets first), without duplicates."""
        seen: set[Artifact] = set()
        result: list[Artifact] = []
        visited: set[int] = {id(self)}
        stack = [(self, iter(self.transitive))]
        while stack:
            node, subsets = stack[-1]
            subset = next(subsets, None)
            if subset is None:
                stack.pop()
                for artifact in node.direct:
                    if artifact not in seen:
                        seen.add(artifact)
                        result.append(artifact)
            elif id(subset) not in visited:
                visited.add(id(subset))
                stack.append((subset, iter(subset.transitive)))
        return result


@dataclass(frozen=True)
class AspectDescriptor:
    name: str
    parameters: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Aspect name cannot be empty")
        object.__setattr__(self, "parameters", tuple(sorted(self.parameters)))


@dataclass(frozen=True)
class ActionSpec:
    """An action registered by a configured target (or an aspect applied to it).

    Attributes:
        owner: The configured target that registered the action.
        mnemonic: Action kind, e.g. "Javac" or "CppCompile".
        action_key: Unique key of the action within the build.
        configuration: Configuration the action runs in, if any.
        arguments: Command line.
        environment: Environment variables as (name, value) pairs.
        inputs: Input files.
        outputs: Output files.
        primary_output: One of outputs, if the action has one.
        aspects: Aspects (outermost last) the action was created by.
        execution_platform: Label of the platform the action executes on.
    """

    owner: RuleConfiguredTarget
    mnemonic: str
    action_key: str
    configuration: BuildConfiguration | None = None
    arguments: tuple[str, ...] = ()
    environment: tuple[tuple[str, str], ...] = ()
    inputs: NestedSet = field(default_factory=NestedSet)
    outputs: tuple[Artifact, ...] = ()
    primary_output: Artifact | None = None
    aspects: tuple[AspectDescriptor, ...] = ()
    execution_platform: str = ""
    discards_outputs: bool = False

    def __post_init__(self) -> None:
        if not self.mnemonic:
            raise ValueError("Action mnemonic cannot be empty")
        if not self.action_key:
            raise ValueError("Action action_key cannot be empty")
        if self.primary_output is not None and self.primary_output not in self.outputs:
            raise ValueError(
                f"Primary output {self.primary_output.exec_path!r} is not among "
                f"the action outputs: {[a.exec_path for a in self.outputs]}"
            )
