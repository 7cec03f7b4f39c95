"""
Tests for nested hierarchy assembly from flat sub-domain rows.
"""

import uuid

from apps.catalog.models import SubDomain
from apps.catalog.services.hierarchy import build_hierarchy, count_nodes


DOMAIN_ID = uuid.uuid4()


def node(title, parent=None, level=None, sort_order=0):
    """Unsaved sub-domain; only the attributes assembly reads are set."""
    return SubDomain(
        id=uuid.uuid4(),
        domain_id=DOMAIN_ID,
        parent_id=parent.id if parent is not None else None,
        title=title,
        slug=title.lower(),
        level=level if level is not None else (1 if parent is None else parent.level + 1),
        sort_order=sort_order,
    )


def titles(nodes):
    return [item["title"] for item in nodes]


def test_nests_children_under_parents():
    root = node("Root")
    child = node("Child", parent=root)
    grandchild = node("Grandchild", parent=child)

    tree = build_hierarchy([grandchild, child, root])

    assert titles(tree) == ["Root"]
    assert titles(tree[0]["children"]) == ["Child"]
    assert titles(tree[0]["children"][0]["children"]) == ["Grandchild"]
    assert tree[0]["children_count"] == 1
    assert tree[0]["children"][0]["children"][0]["children_count"] == 0
    assert count_nodes(tree) == 3


def test_siblings_sorted_by_sort_order_then_title():
    root = node("Root")
    rows = [
        root,
        node("zeta", parent=root, sort_order=0),
        node("Alpha", parent=root, sort_order=0),
        node("First", parent=root, sort_order=-1),
    ]

    tree = build_hierarchy(rows)

    assert titles(tree[0]["children"]) == ["First", "Alpha", "zeta"]


def test_shape_comes_from_parent_not_level():
    root = node("Root")
    # stale cached level must not move the node out of its parent
    child = node("Child", parent=root, level=4)

    tree = build_hierarchy([root, child])

    assert titles(tree[0]["children"]) == ["Child"]
    assert tree[0]["children"][0]["level"] == 4


def test_nodes_with_missing_parent_are_omitted():
    root = node("Root")
    hidden = node("Hidden", parent=root)
    orphan = node("Orphan", parent=hidden)

    tree = build_hierarchy([root, orphan])

    assert titles(tree) == ["Root"]
    assert tree[0]["children"] == []
    assert count_nodes(tree) == 1


def test_projects_attached_per_node():
    root = node("Root")
    leaf = node("Leaf", parent=root)
    projects = {leaf.id: [{"id": "p1", "title": "Drone"}]}

    tree = build_hierarchy([root, leaf], projects_by_node=projects)

    assert tree[0]["projects"] == []
    assert tree[0]["children"][0]["projects"] == [{"id": "p1", "title": "Drone"}]


def test_node_summary_fields():
    root = node("Root")

    (data,) = build_hierarchy([root])

    assert data["id"] == str(root.id)
    assert data["domain"] == str(DOMAIN_ID)
    assert data["parent"] is None
    assert data["slug"] == "root"
    assert "projects" not in data


def test_empty_input():
    assert build_hierarchy([]) == []
