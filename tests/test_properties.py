"""End-to-end behaviour of the version engine on small trees.

One test class per guarantee: monotonic +1 propagation, single parent,
propagation to the root, view aliasing, map presence, bulk move, and
detach-without-attach.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from versioned_tree import InvariantViolation, Leaf, Map, Node, Sequence, move_all_into


def _versions(*nodes: Node) -> tuple[int, ...]:
    return tuple(node.version for node in nodes)


class TestVersionMonotonicity:
    """Each mutation adds exactly 1 to the node and to every ancestor."""

    def test_every_mutation_adds_one_along_the_path(self) -> None:
        leaf = Leaf(0)
        inner = Sequence.of(leaf)
        middle = Map.of({"inner": inner})
        root = Sequence.of(middle)
        sibling = Leaf("untouched")
        middle.set("sibling", sibling)  # root 2, middle 2

        mutations = [
            lambda: leaf.set_value(1),
            lambda: inner.set(0, Leaf(2)),
            lambda: middle.delete("missing"),
            lambda: root.append(Leaf(3)),
        ]
        for mutate in mutations:
            before = _versions(root, middle, inner, sibling)
            mutate()
            after = _versions(root, middle, inner, sibling)
            assert all(b >= a for a, b in zip(before, after))
            assert after[0] == before[0] + 1
            assert after[3] == before[3]

    def test_versions_never_decrease_after_detach(self) -> None:
        leaf = Leaf(0)
        parent = Map.of({"k": leaf})
        leaf.set_value(1)
        parent.delete("k")
        assert leaf.version == 2
        assert parent.version == 3
        leaf.set_value(2)
        assert parent.version == 3


class TestSingleParent:
    def test_attaching_an_attached_node_always_raises(self) -> None:
        leaf = Leaf(1)
        Map.of({"first": leaf})
        targets: list[tuple[str, Callable[[], object]]] = [
            ("seq.set", lambda: Sequence(1).set(0, leaf)),
            ("seq.append", lambda: Sequence().append(leaf)),
            ("seq.of", lambda: Sequence.of(leaf)),
            ("map.set", lambda: Map().set("k", leaf)),
            ("map.of", lambda: Map.of({"k": leaf})),
        ]
        for name, attempt in targets:
            with pytest.raises(InvariantViolation):
                attempt()
            assert leaf.is_attached, name


class TestPropagationReachesRoot:
    def test_leaf_under_map_under_sequence(self) -> None:
        leaf = Leaf("v")
        child = Map()
        root = Sequence(1)
        root.set(0, child)
        child.set("leaf", leaf)
        base = _versions(leaf, child, root)

        leaf.set_value("w")

        assert _versions(leaf, child, root) == tuple(v + 1 for v in base)


class TestViewAliasing:
    def test_view_write_lands_in_source_and_versions_match(self) -> None:
        source = Sequence(5)
        view = source.view(1, 3)
        node = Leaf("x")

        view.set(0, node)

        assert source.get(1) is node
        assert view.version == source.version == 2


class TestMapPresence:
    def test_presence_lifecycle(self) -> None:
        m = Map()
        leaf = Leaf(1)
        assert m.get_with_presence("k") == (None, False)
        m.set("k", leaf)
        assert m.get_with_presence("k") == (leaf, True)
        m.delete("k")
        assert m.get_with_presence("k") == (None, False)


class TestBulkMove:
    def test_move_clears_source_and_bumps_once_each(self) -> None:
        a, b = Leaf("A"), Leaf("B")
        src = Sequence.of(a, b)
        dst = Sequence(2)
        src_before, dst_before = src.version, dst.version

        move_all_into(dst, src)

        assert list(dst) == [a, b]
        assert list(src) == [None, None]
        assert src.version == src_before + 1
        assert dst.version == dst_before + 1
        a.set_value("A2")
        assert dst.version == dst_before + 2
        assert src.version == src_before + 1


class TestDetachWithoutAttach:
    def test_second_detach_of_a_removed_node_raises(self) -> None:
        """Each detach must pair with an earlier attach."""
        left_leaf = Leaf("left")
        left = Map.of({"k": left_leaf})
        right = Map.of({"k": Leaf("right")})
        left.delete("k")

        with pytest.raises(InvariantViolation):
            left_leaf._core.detach(left._core)

        assert right.get("k") is not left_leaf

    def test_detaching_a_never_attached_node_raises(self) -> None:
        with pytest.raises(InvariantViolation):
            Leaf("loose")._core.detach(Map()._core)
