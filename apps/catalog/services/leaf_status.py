"""
Leaf flag maintenance.

is_leaf is recomputed from the children count every time the structure
around a node changes; it is never flipped by hand at call sites.
"""

from typing import Optional

from ..models import SubDomain


def refresh_leaf_flag(repo, sub_domain_id) -> Optional[SubDomain]:
    """
    Set is_leaf on a sub-domain from a fresh count of its children.

    The row is read with a lock, so inside a transaction concurrent
    structural changes under the same node serialise on it.

    Returns:
        The sub-domain, or None when it no longer exists
    """
    if sub_domain_id is None:
        return None

    sub_domain = repo.get_for_update(sub_domain_id)
    if sub_domain is None:
        return None

    is_leaf = repo.count_children(sub_domain_id) == 0
    if sub_domain.is_leaf != is_leaf:
        sub_domain.is_leaf = is_leaf
        repo.save(sub_domain, update_fields=['is_leaf'])
    return sub_domain
