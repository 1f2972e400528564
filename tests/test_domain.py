"""Tests for the domain objects used as interning keys."""

import time

import pytest

from actiongraph.domain import (
    ActionSpec,
    Artifact,
    AspectDescriptor,
    BuildConfiguration,
    Label,
    NestedSet,
    RuleConfiguredTarget,
)


class TestLabel:
    def test_str(self):
        assert str(Label("java/app", "lib")) == "//java/app:lib"
        assert str(Label("", "root")) == "//:root"
        assert str(Label("pkg", "x", repository="ext")) == "@ext//pkg:x"

    @pytest.mark.parametrize(
        "text", ["//java/app:lib", "//:root", "@ext//pkg:x"]
    )
    def test_parse_round_trip(self, text):
        assert str(Label.parse(text)) == text

    def test_parse_short_form(self):
        assert Label.parse("//java/app") == Label("java/app", "app")

    @pytest.mark.parametrize("text", ["java/app:lib", "@ext", "//pkg:"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            Label.parse(text)

    def test_semantic_equality(self):
        assert Label("a", "b") == Label("a", "b")
        assert hash(Label("a", "b")) == hash(Label("a", "b"))


class TestKeys:
    def test_target_equality(self):
        a = RuleConfiguredTarget(Label("a", "b"), "java_library")
        b = RuleConfiguredTarget(Label("a", "b"), "java_library")
        c = RuleConfiguredTarget(Label("a", "b"), "java_binary")
        assert a == b
        assert a != c

    def test_keys_are_frozen(self):
        target = RuleConfiguredTarget(Label("a", "b"))
        with pytest.raises(AttributeError):
            target.rule_class_string = "java_library"

    def test_configuration_checksum(self):
        a = BuildConfiguration("k8-opt", "k8", (("a", "1"), ("b", "2")))
        b = BuildConfiguration("k8-opt", "k8", (("b", "2"), ("a", "1")))
        c = BuildConfiguration("k8-opt", "k8", (("a", "2"),))
        assert a == b
        assert a.checksum == b.checksum
        assert a.checksum != c.checksum
        assert len(a.checksum) == 64

    def test_checksum_keeps_repeated_options(self):
        repeated = BuildConfiguration("k8-opt", "k8", (("copt", "-O2"), ("copt", "-g")))
        single = BuildConfiguration("k8-opt", "k8", (("copt", "-g"),))
        assert repeated.checksum != single.checksum

    def test_artifact_validation(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            Artifact("")
        with pytest.raises(ValueError, match="must be relative"):
            Artifact("/usr/bin/javac")

    def test_aspect_validation(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            AspectDescriptor("")


class TestNestedSet:
    def test_to_list_post_order_deduplicated(self):
        a, b, c = Artifact("a"), Artifact("b"), Artifact("c")
        inner = NestedSet(direct=(a, b))
        outer = NestedSet(direct=(c, a), transitive=(inner, inner))
        assert outer.to_list() == [a, b, c]

    def test_is_empty(self):
        assert NestedSet().is_empty()
        assert NestedSet(transitive=(NestedSet(),)).is_empty()
        assert not NestedSet(direct=(Artifact("a"),)).is_empty()

    def test_equality(self):
        a = Artifact("a")
        assert NestedSet(direct=(a,)) == NestedSet(direct=(Artifact("a"),))
        assert hash(NestedSet(direct=(a,))) == hash(NestedSet(direct=(Artifact("a"),)))

    def test_subset_order_matters(self):
        a = NestedSet(direct=(Artifact("a"),))
        b = NestedSet(direct=(Artifact("b"),))
        assert NestedSet(transitive=(a, b)) != NestedSet(transitive=(b, a))
        assert NestedSet(direct=(Artifact("a"),)) != "a"

    def test_deep_chain(self):
        """Hashing, equality and flattening do not recurse per level."""

        def chain():
            nested = NestedSet()
            for i in range(5000):
                nested = NestedSet(direct=(Artifact(f"a{i}"),), transitive=(nested,))
            return nested

        first, second = chain(), chain()
        assert first is not second
        assert first == second
        assert hash(first) == hash(second)
        assert len(first.to_list()) == 5000
        assert first.to_list()[0] == Artifact("a0")
        assert not first.is_empty()
        assert "transitive=<1 subsets>" in repr(first)

    def test_shared_diamond(self):
        """Shared subsets are compared once, not once per path."""

        def diamond():
            nested = NestedSet(direct=(Artifact("base"),))
            for i in range(60):
                side = NestedSet(direct=(Artifact(f"a{i}"),), transitive=(nested,))
                nested = NestedSet(transitive=(nested, side))
            return nested

        first, second = diamond(), diamond()
        start = time.perf_counter()
        assert first == second
        assert len(first.to_list()) == 61
        assert time.perf_counter() - start < 5


class TestActionSpec:
    def _owner(self):
        return RuleConfiguredTarget(Label("a", "b"), "genrule")

    def test_empty_mnemonic(self):
        with pytest.raises(ValueError, match="mnemonic"):
            ActionSpec(owner=self._owner(), mnemonic="", action_key="k")

    def test_empty_action_key(self):
        with pytest.raises(ValueError, match="action_key"):
            ActionSpec(owner=self._owner(), mnemonic="Genrule", action_key="")

    def test_primary_output_must_be_output(self):
        with pytest.raises(ValueError, match="not among"):
            ActionSpec(
                owner=self._owner(),
                mnemonic="Genrule",
                action_key="k",
                outputs=(Artifact("out/a"),),
                primary_output=Artifact("out/b"),
            )
