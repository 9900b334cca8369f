"""Tests for GraphNode and GraphDocument."""

import pytest

from nestedtags.graph import GraphDocument, GraphNode, NodeKind, NodeRole


class TestNodeKind:
    """Tests for NodeKind enum."""

    def test_all_node_kinds_exist(self):
        """All expected node kinds exist with correct values."""
        expected = {"TAG": "tag", "FILE": "file"}
        for name, value in expected.items():
            kind = getattr(NodeKind, name)
            assert kind.value == value, f"NodeKind.{name} should have value '{value}'"


class TestNodeRole:
    def test_values(self):
        assert NodeRole.ROOT_TAG.value == "root-tag"
        assert NodeRole.CHILD_NODE.value == "child-node"
        assert NodeRole.FILE.value == "file"

    def test_for_level(self):
        assert NodeRole.for_level(0) == NodeRole.ROOT_TAG
        assert NodeRole.for_level(1) == NodeRole.CHILD_NODE
        assert NodeRole.for_level(4) == NodeRole.CHILD_NODE


class TestLinks:
    def test_link_is_symmetric(self):
        a = GraphNode(id="a", kind=NodeKind.TAG)
        b = GraphNode(id="b", kind=NodeKind.TAG)

        payload = a.link(b)

        assert payload is True
        assert a.links == {"b": True}
        assert b.links == {"a": True}

    def test_link_keeps_existing_payload(self):
        a = GraphNode(id="a", kind=NodeKind.TAG, links={"b": 5})
        b = GraphNode(id="b", kind=NodeKind.TAG)

        a.link(b, payload=1)

        assert a.links["b"] == 5
        assert b.links["a"] == 5

    def test_link_takes_payload_from_other_side(self):
        a = GraphNode(id="a", kind=NodeKind.TAG)
        b = GraphNode(id="b", kind=NodeKind.TAG, links={"a": "x"})

        a.link(b)

        assert a.links["b"] == "x"

    def test_self_link_rejected(self):
        a = GraphNode(id="a", kind=NodeKind.TAG)
        with pytest.raises(ValueError):
            a.link(a)

    def test_unlink_returns_payload(self):
        a = GraphNode(id="a", kind=NodeKind.FILE, links={"b": 3})
        assert a.unlink("b") == 3
        assert not a.has_link("b")
        assert a.unlink("b") is None

    def test_iter_links(self):
        a = GraphNode(id="a", kind=NodeKind.FILE, links={"b": True, "c": False})
        assert list(a.iter_links()) == [("b", True), ("c", False)]
        assert a.has_link("c")


class TestRelatedFiles:
    def test_merge_is_additive_and_unique(self):
        node = GraphNode(id="X", kind=NodeKind.TAG, related_files=["a.md"], aliases=["a.md"])

        node.merge_related_files(["b.md", "a.md"])
        node.merge_related_files(["b.md"])

        assert node.related_files == ["a.md", "b.md"]
        assert node.aliases == ["a.md", "b.md"]


class TestGraphDocument:
    @pytest.fixture
    def document(self):
        return GraphDocument(
            [
                GraphNode(id="f.md", kind=NodeKind.FILE, links={"#A|B": True, "gone": True}),
                GraphNode(id="#A|B", kind=NodeKind.TAG, links={"f.md": True}),
                GraphNode(id="#C", kind=NodeKind.TAG, links={"f.md": True}),
            ]
        )

    def test_lookup_and_order(self, document):
        assert document.node_ids() == ["f.md", "#A|B", "#C"]
        assert document.find_by_id("#C").id == "#C"
        assert document.find_by_id("nope") is None
        assert "#C" in document
        assert len(document) == 3

    def test_nodes_by_kind(self, document):
        assert [n.id for n in document.nodes_by_kind(NodeKind.TAG)] == ["#A|B", "#C"]

    def test_compound_ids(self, document):
        assert document.compound_ids("|") == ["#A|B"]

    def test_holders_of(self, document):
        assert [n.id for n in document.holders_of("f.md")] == ["#A|B", "#C"]

    def test_broken_references(self, document):
        broken = document.broken_references()
        assert [(b.source_id, b.target_id) for b in broken] == [("f.md", "gone")]
        assert str(broken[0]) == "f.md --> gone (missing)"

    def test_asymmetric_links(self, document):
        assert document.asymmetric_links() == [("#C", "f.md")]

    def test_asymmetric_payload_mismatch(self):
        document = GraphDocument(
            [
                GraphNode(id="a", kind=NodeKind.TAG, links={"b": 1}),
                GraphNode(id="b", kind=NodeKind.TAG, links={"a": 2}),
            ]
        )
        assert document.asymmetric_links() == [("a", "b"), ("b", "a")]

    def test_clone_is_independent(self, document):
        copy = document.clone()
        copy.find_by_id("#C").links.clear()
        copy.remove_node("f.md")

        assert document.find_by_id("#C").links == {"f.md": True}
        assert "f.md" in document

    def test_restore_keeps_identity(self, document):
        snapshot = document.clone()
        document.remove_node("#C")

        document.restore(snapshot)

        assert document.node_ids() == ["f.md", "#A|B", "#C"]
        document.find_by_id("#C").links.clear()
        assert snapshot.find_by_id("#C").links == {"f.md": True}
