"""
Hierarchy assembly

Turns the flat list of a domain's sub-domains into nested dicts for
presentation. Tree shape comes from parent_id alone; level is carried along
as data but never used to decide where a node goes.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..models import SubDomain


def node_summary(sub_domain: SubDomain) -> Dict[str, Any]:
    """Plain representation of one sub-domain inside an assembled tree."""
    return {
        'id': str(sub_domain.id),
        'domain': str(sub_domain.domain_id),
        'parent': str(sub_domain.parent_id) if sub_domain.parent_id else None,
        'title': sub_domain.title,
        'slug': sub_domain.slug,
        'description': sub_domain.description,
        'level': sub_domain.level,
        'is_leaf': sub_domain.is_leaf,
        'is_active': sub_domain.is_active,
        'sort_order': sub_domain.sort_order,
    }


def _sibling_key(sub_domain: SubDomain):
    return (sub_domain.sort_order, sub_domain.title.lower(), str(sub_domain.id))


def build_hierarchy(
    sub_domains: Iterable[SubDomain],
    projects_by_node: Optional[Dict[Any, List[Dict[str, Any]]]] = None,
    to_dict: Callable[[SubDomain], Dict[str, Any]] = node_summary,
) -> List[Dict[str, Any]]:
    """
    Assemble nested sub-domain trees.

    Args:
        sub_domains: All sub-domains to place (normally one domain's)
        projects_by_node: Optional project summaries keyed by sub-domain id;
            when given every node gets a 'projects' list
        to_dict: Converts a sub-domain to its output dict

    Returns:
        Root nodes (parent is None), each with a nested 'children' list.
        Nodes whose parent is not in sub_domains are unreachable and left out.
    """
    sub_domains = list(sub_domains)
    children_of = defaultdict(list)
    for sub_domain in sub_domains:
        children_of[sub_domain.parent_id].append(sub_domain)
    for siblings in children_of.values():
        siblings.sort(key=_sibling_key)

    def make(sub_domain: SubDomain) -> Dict[str, Any]:
        data = to_dict(sub_domain)
        data['children'] = []
        if projects_by_node is not None:
            data['projects'] = projects_by_node.get(sub_domain.id, [])
        return data

    roots = [make(sub_domain) for sub_domain in children_of[None]]

    # Iterative fill: (output dict, sub-domain id) pairs still to expand
    stack = [(data, sub_domain.id) for data, sub_domain in zip(roots, children_of[None])]
    placed = {sub_domain.id for sub_domain in children_of[None]}
    while stack:
        data, node_id = stack.pop()
        for child in children_of.get(node_id, []):
            if child.id in placed:
                continue
            placed.add(child.id)
            child_data = make(child)
            data['children'].append(child_data)
            stack.append((child_data, child.id))
        data['children_count'] = len(data['children'])

    return roots


def count_nodes(tree: List[Dict[str, Any]]) -> int:
    """Total number of nodes in an assembled tree."""
    total = 0
    stack = list(tree)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.get('children', []))
    return total
