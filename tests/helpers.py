"""
Assertion helpers for the sub-domain tree tests.
"""

from apps.catalog.models import SubDomain


def reload(sub_domain):
    return SubDomain.objects.get(id=sub_domain.id)


def tree_snapshot(domain):
    """(id, parent_id, level, is_leaf) of every sub-domain of a domain."""
    return sorted(
        (str(node.id), str(node.parent_id), node.level, node.is_leaf)
        for node in SubDomain.objects.filter(domain=domain)
    )


def assert_tree_invariants(domain, max_depth=5):
    """Level, leaf and acyclicity invariants for every sub-domain of a domain."""
    nodes = {node.id: node for node in SubDomain.objects.filter(domain=domain)}
    for node in nodes.values():
        if node.parent_id is None:
            assert node.level == 1, node
        else:
            parent = nodes[node.parent_id]
            assert parent.domain_id == node.domain_id
            assert node.level == parent.level + 1, node

        has_children = any(other.parent_id == node.id for other in nodes.values())
        assert node.is_leaf == (not has_children), node

        steps, current = 0, node
        while current.parent_id is not None:
            current = nodes[current.parent_id]
            steps += 1
            assert steps < max_depth, node
