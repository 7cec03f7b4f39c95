"""
Tests for subtree collection order and cascade record deletion.
"""

import uuid

import pytest

from apps.catalog.models import Image, Project, SubDomain
from apps.catalog.services import subdomain_repository
from apps.catalog.services.subtree_deletion import collect_subtree_ids, delete_subtree


class InMemoryChildren:
    def __init__(self, children):
        self.children = children

    def get_child_ids(self, node_id):
        return list(self.children.get(node_id, []))


def test_every_node_comes_after_its_descendants():
    a, b, c, d, e = (uuid.uuid4() for _ in range(5))
    repo = InMemoryChildren({a: [b, c], b: [d], d: [e]})

    order = collect_subtree_ids(repo, a)

    assert set(order) == {a, b, c, d, e}
    assert order[-1] == a
    assert order.index(e) < order.index(d) < order.index(b)
    assert order.index(c) < order.index(a)


def test_leaf_collects_itself_only():
    leaf = uuid.uuid4()

    assert collect_subtree_ids(InMemoryChildren({}), leaf) == [leaf]


@pytest.mark.django_db
def test_delete_subtree_removes_records_and_returns_file_names(make_node, make_project, make_image, domain):
    root = make_node("Root")
    child = make_node("Child", parent=root)
    project = make_project(child, "Line follower")
    make_image(Image.ENTITY_SUB_DOMAIN, root.id, "root.png")
    project_image = make_image(Image.ENTITY_PROJECT, project.id, "line.png")
    outside = make_node("Outside")
    outside_image = make_image(Image.ENTITY_SUB_DOMAIN, outside.id, "outside.png")

    result = delete_subtree(subdomain_repository, root.id)

    assert (result.sub_domains, result.projects, result.images) == (2, 1, 2)
    assert project_image.file.name in result.file_names
    assert len(result.file_names) == 2
    assert list(SubDomain.objects.filter(domain=domain)) == [outside]
    assert not Project.objects.exists()
    assert list(Image.objects.all()) == [outside_image]
