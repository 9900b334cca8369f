"""Tests for host record (de)serialization."""

from nestedtags.graph import NodeKind, NodeRole, expand
from nestedtags.graph.serialize import (
    DISPLAY_ALIAS_FIELDS,
    deserialize_document,
    deserialize_node,
    serialize_document,
    serialize_node,
)


class TestDeserialize:
    def test_tag_record(self):
        node = deserialize_node("#A", {"type": "tag", "links": {"f.md": True}, "name": "#A"})

        assert node.kind == NodeKind.TAG
        assert node.display_name == "#A"
        assert node.links == {"f.md": True}
        assert not node.normalized

    def test_obsidian_file_type(self):
        node = deserialize_node("f.md", {"type": "", "links": {}})

        assert node.kind == NodeKind.FILE
        assert node.host_type == ""

    def test_unknown_type_is_kept(self):
        node = deserialize_node("img.png", {"type": "attachment", "links": {}})

        assert node.kind == NodeKind.FILE
        assert serialize_node(node)["type"] == "attachment"

    def test_unknown_fields_preserved(self):
        record = {"type": "", "links": {}, "weight": 4, "name": "F"}
        node = deserialize_node("f.md", record)

        assert serialize_node(node)["weight"] == 4
        assert serialize_node(node)["name"] == "F"

    def test_record_not_shared(self):
        record = {"type": "tag", "links": {"a": True}, "meta": {"k": 1}}
        node = deserialize_node("#T", record)
        node.links["b"] = True
        node.extra["meta"]["k"] = 2

        assert record["links"] == {"a": True}
        assert record["meta"] == {"k": 1}

    def test_level_and_role_read_back(self):
        node = deserialize_node("Mid", {"type": "tag", "links": {}, "level": 1, "role": "child-node"})
        assert node.level == 1
        assert node.role == NodeRole.CHILD_NODE

    def test_bad_role_and_level_ignored(self):
        node = deserialize_node("Mid", {"type": "tag", "links": {}, "level": True, "role": "boss"})
        assert node.level is None
        assert node.role is None

    def test_missing_links(self):
        assert deserialize_node("x", {"type": "tag"}).links == {}

    def test_non_mapping_records_skipped(self):
        document = deserialize_document({"a": {"type": "tag", "links": {}}, "b": None})
        assert document.node_ids() == ["a"]


class TestSerialize:
    def test_display_aliases_projected(self):
        node = deserialize_node("#Root", {"type": "tag", "links": {}, "title": "stale"})
        node.display_name = "Root"
        node.normalized = True

        record = serialize_node(node)

        assert {record[key] for key in DISPLAY_ALIAS_FIELDS} == {"Root"}

    def test_tag_left_alone_keeps_its_alias_fields(self):
        record = {"type": "tag", "links": {}, "name": "#A||B", "title": "A or B"}

        assert serialize_node(deserialize_node("#A||B", record)) == record

    def test_file_nodes_get_no_aliases(self):
        record = serialize_node(deserialize_node("f.md", {"type": "", "links": {}}))
        assert "displayText" not in record

    def test_expanded_output_shape(self):
        nodes = {
            "F.md": {"type": "", "links": {"#Root|Leaf": True}},
            "#Root|Leaf": {"type": "tag", "links": {}},
        }
        document = deserialize_document(nodes)
        expand(document)

        out = serialize_document(document)

        assert list(out) == ["F.md", "#Root", "Leaf"]
        assert out["Leaf"]["level"] == 1
        assert out["Leaf"]["role"] == "child-node"
        assert out["Leaf"]["relatedFiles"] == ["F.md"]
        assert out["Leaf"]["aliases"] == ["F.md"]
        assert out["#Root"]["displayName"] == "Root"
        assert out["F.md"]["links"] == {"Leaf": True}
        assert out["F.md"]["type"] == ""
        assert "relatedFiles" not in out["#Root"]
