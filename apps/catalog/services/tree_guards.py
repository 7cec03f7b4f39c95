"""
Structural guards for the sub-domain tree.

Pure functions over a SubDomainRepository: they read through the repository
and raise, they never write.
"""

import uuid
from typing import Optional

from apps.common.exceptions import CircularReferenceError, DepthExceededError

# Upper bound on parent hops for one ancestor walk; far beyond any legal depth
MAX_ANCESTOR_STEPS = 1000


def coerce_id(value) -> Optional[uuid.UUID]:
    """
    Normalise an id coming from a request (str or UUID) to a UUID.

    Returns None for values that cannot be a sub-domain id at all.
    """
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def would_create_cycle(repo, sub_domain_id, new_parent_id, max_steps: int = MAX_ANCESTOR_STEPS) -> bool:
    """
    Check whether making new_parent_id the parent of sub_domain_id closes a cycle.

    Walks the parent chain upwards from the candidate parent. Reaching the
    sub-domain itself (including new_parent_id == sub_domain_id) means the
    candidate is inside its subtree.

    Raises:
        CircularReferenceError: if the stored chain above the candidate
            already loops without passing through the sub-domain, or does
            not reach a root within max_steps hops.
    """
    target = coerce_id(sub_domain_id)
    current = coerce_id(new_parent_id)
    visited = set()
    steps = 0

    while current is not None:
        if current == target:
            return True
        if current in visited:
            # Corrupt data: a loop that does not include the target
            raise CircularReferenceError(sub_domain_id, new_parent_id)
        visited.add(current)

        found, parent_id = repo.get_parent_id(current)
        if not found:
            break
        if parent_id is not None and steps >= max_steps:
            # Chain longer than any legal tree
            raise CircularReferenceError(sub_domain_id, new_parent_id)
        current = parent_id
        steps += 1

    return False


def subtree_height(repo, sub_domain_id) -> int:
    """
    Number of levels in the subtree rooted at sub_domain_id (1 for a leaf).
    """
    height = 0
    frontier = [sub_domain_id]
    seen = set()

    while frontier:
        height += 1
        next_frontier = []
        for node_id in frontier:
            if node_id in seen:
                continue
            seen.add(node_id)
            next_frontier.extend(repo.get_child_ids(node_id))
        frontier = next_frontier

    return height


def check_depth(level: int, max_depth: int) -> None:
    """Raise DepthExceededError when level is deeper than max_depth."""
    if level > max_depth:
        raise DepthExceededError(level, max_depth)
