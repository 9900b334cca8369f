"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def scenario_a():
    """One file linked to a three-level compound tag."""
    from tests.core.graph_test_helpers import build_document, file_record, tag_record

    return build_document(
        {
            "F.md": file_record(["#Root|Mid|Leaf"]),
            "#Root|Mid|Leaf": tag_record(["F.md"]),
        }
    )


@pytest.fixture
def shared_child_document():
    """Two compound tags sharing the child segment X."""
    from tests.core.graph_test_helpers import build_document, file_record, tag_record

    return build_document(
        {
            "one.md": file_record(["#A|X"]),
            "two.md": file_record(["#B|X"]),
            "#A|X": tag_record(["one.md"]),
            "#B|X": tag_record(["two.md"]),
        }
    )


@pytest.fixture
def mixed_document():
    """Plain tags, compound tags, a malformed tag and one-sided host links."""
    from tests.core.graph_test_helpers import build_document, file_record, tag_record

    return build_document(
        {
            "notes/a.md": file_record(["#Proj|2|Design", "#Solo"]),
            "notes/b.md": file_record(["#Proj|2", "#A||B"]),
            "notes/c.md": file_record(["#Area|2"]),
            "#Proj|2|Design": tag_record(),
            "#Proj|2": tag_record(),
            "#Area|2": tag_record(),
            "#Solo": tag_record(),
            "#A||B": tag_record(),
        }
    )


@pytest.fixture
def expander():
    """Expander with default options."""
    from nestedtags.graph import HierarchyExpander

    return HierarchyExpander()
