"""Unit tests for the descriptor dataclasses and their merge semantics.

WHY: Every registration ends in a merge. If merges drop entries, lose
order, or are not idempotent, the generated configuration silently
diverges from what scanners reported.

HOW: Tests exercise each descriptor kind directly, without a collector:
  - ClassDescriptor: minimal/members checks, flag and member unions
  - ReflectionDescriptor: keyed union, copy-on-insert, idempotence
  - ResourcesDescriptor / ProxiesDescriptor / InitializationDescriptor:
    ordered-set behaviour and idempotence

RULES:
- Idempotence is checked by merging the same value twice and comparing
  against a single merge
"""

import pytest

from aot_collector.core.descriptors import (
    ClassDescriptor,
    FieldDescriptor,
    Flag,
    InitializationDescriptor,
    MethodDescriptor,
    ProxiesDescriptor,
    ProxyDescriptor,
    ReflectionDescriptor,
    ResourcesDescriptor,
)


def _rich(name="com.example.Service"):
    return ClassDescriptor(
        name=name,
        methods=[MethodDescriptor("run", ("java.lang.String",))],
        fields=[FieldDescriptor("count", allow_write=True)],
        flags={Flag.ALL_PUBLIC_METHODS},
    )


class TestClassDescriptor:

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            ClassDescriptor(name="")

    def test_name_only_is_minimal(self):
        assert ClassDescriptor.of("a.B").is_minimal()

    def test_non_constructor_flag_is_still_minimal(self):
        assert ClassDescriptor.of("a.B", Flag.ALL_DECLARED_FIELDS).is_minimal()

    @pytest.mark.parametrize("flag", [Flag.ALL_DECLARED_CONSTRUCTORS, Flag.ALL_PUBLIC_CONSTRUCTORS])
    def test_constructor_flags_specify_members(self, flag):
        assert ClassDescriptor.of("a.B", flag).members_specified()

    def test_methods_specify_members(self):
        cd = ClassDescriptor(name="a.B", methods=[MethodDescriptor("<init>")])
        assert cd.members_specified()

    def test_duplicate_flags_collapse(self):
        cd = ClassDescriptor.of("a.B", Flag.ALL_PUBLIC_METHODS, Flag.ALL_PUBLIC_METHODS)
        assert cd.flags == {Flag.ALL_PUBLIC_METHODS}

    def test_merge_unions_flags_and_members(self):
        cd = ClassDescriptor.of("com.example.Service", Flag.ALL_DECLARED_FIELDS)
        cd.merge(_rich())
        assert cd.flags == {Flag.ALL_DECLARED_FIELDS, Flag.ALL_PUBLIC_METHODS}
        assert cd.methods == [MethodDescriptor("run", ("java.lang.String",))]
        assert cd.fields == [FieldDescriptor("count", allow_write=True)]

    def test_merge_is_idempotent(self):
        once = ClassDescriptor.of("com.example.Service")
        once.merge(_rich())
        twice = ClassDescriptor.of("com.example.Service")
        twice.merge(_rich())
        twice.merge(_rich())
        assert once == twice

    def test_merge_rejects_other_name(self):
        with pytest.raises(ValueError):
            ClassDescriptor.of("a.B").merge(ClassDescriptor.of("a.C"))

    def test_copy_is_independent(self):
        original = _rich()
        clone = original.copy()
        clone.add_method(MethodDescriptor("stop"))
        clone.flags.add(Flag.UNSAFE_ALLOCATED)
        assert len(original.methods) == 1
        assert Flag.UNSAFE_ALLOCATED not in original.flags


class TestReflectionDescriptor:

    def test_merge_adds_new_entries_in_order(self):
        rd = ReflectionDescriptor()
        rd.merge(ClassDescriptor.of("b.B"))
        rd.merge(ClassDescriptor.of("a.A"))
        assert [cd.name for cd in rd.class_descriptors] == ["b.B", "a.A"]

    def test_merge_same_name_unions(self):
        rd = ReflectionDescriptor([ClassDescriptor.of("a.A", Flag.ALL_PUBLIC_FIELDS)])
        rd.merge(ClassDescriptor.of("a.A", Flag.ALL_PUBLIC_METHODS))
        assert len(rd) == 1
        assert rd.get("a.A").flags == {Flag.ALL_PUBLIC_FIELDS, Flag.ALL_PUBLIC_METHODS}

    def test_merge_reflection_descriptor(self):
        rd = ReflectionDescriptor([ClassDescriptor.of("a.A")])
        rd.merge(ReflectionDescriptor([ClassDescriptor.of("b.B"), ClassDescriptor.of("a.A")]))
        assert "a.A" in rd and "b.B" in rd
        assert len(rd) == 2

    def test_merge_does_not_alias_caller_descriptor(self):
        mine = ClassDescriptor.of("a.A")
        rd = ReflectionDescriptor()
        rd.merge(mine)
        rd.merge(ClassDescriptor.of("a.A", Flag.ALL_PUBLIC_METHODS))
        assert mine.flags == set()

    def test_merge_is_idempotent(self):
        once = ReflectionDescriptor()
        once.merge(_rich())
        twice = ReflectionDescriptor()
        twice.merge(_rich())
        twice.merge(_rich())
        assert once == twice

    def test_never_removes_entries(self):
        rd = ReflectionDescriptor([ClassDescriptor.of("a.A")])
        rd.merge(ReflectionDescriptor())
        assert len(rd) == 1


class TestResourcesDescriptor:

    def test_patterns_and_bundles_are_independent(self):
        rd = ResourcesDescriptor()
        rd.add("messages")
        rd.add_bundle("messages")
        assert rd.patterns == ["messages"]
        assert rd.bundles == ["messages"]

    def test_merge_is_idempotent(self):
        other = ResourcesDescriptor(patterns=["a.txt", "b.txt"], bundles=["i18n.msg"])
        once = ResourcesDescriptor()
        once.merge(other)
        twice = ResourcesDescriptor()
        twice.merge(other)
        twice.merge(other)
        assert once == twice
        assert twice.patterns == ["a.txt", "b.txt"]


class TestProxiesDescriptor:

    def test_order_is_significant(self):
        assert ProxyDescriptor.of(["A", "B"]) != ProxyDescriptor.of(["B", "A"])

    def test_add_is_idempotent(self):
        pd = ProxiesDescriptor()
        pd.add(ProxyDescriptor.of(["A", "B"]))
        pd.add(ProxyDescriptor.of(["A", "B"]))
        assert pd.proxies == [ProxyDescriptor(("A", "B"))]

    def test_merge_keeps_order(self):
        pd = ProxiesDescriptor([ProxyDescriptor.of(["A"])])
        pd.merge(ProxiesDescriptor([ProxyDescriptor.of(["B"]), ProxyDescriptor.of(["A"])]))
        assert [p.interfaces for p in pd.proxies] == [("A",), ("B",)]


class TestInitializationDescriptor:

    def test_sets_keep_insertion_order(self):
        init = InitializationDescriptor()
        init.add_buildtime_class("z.Z")
        init.add_buildtime_class("a.A")
        init.add_buildtime_class("z.Z")
        assert init.buildtime_classes == ["z.Z", "a.A"]

    def test_no_cross_set_deduplication(self):
        init = InitializationDescriptor()
        init.add_buildtime_class("a.A")
        init.add_runtime_class("a.A")
        assert init.buildtime_classes == ["a.A"]
        assert init.runtime_classes == ["a.A"]

    def test_merge(self):
        init = InitializationDescriptor(buildtime_packages=["org.x"])
        init.merge(InitializationDescriptor(
            buildtime_packages=["org.x", "org.y"],
            runtime_classes=["a.A"],
        ))
        assert init.buildtime_packages == ["org.x", "org.y"]
        assert init.runtime_classes == ["a.A"]
        assert not init.is_empty()
