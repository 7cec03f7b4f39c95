"""
Level propagation for the sub-domain tree.

level is a cached depth: 1 for a root, parent.level + 1 otherwise. After a
node moves, every descendant's level is rewritten from its parent's.
"""

from typing import Optional

import structlog

from ..models import SubDomain

logger = structlog.get_logger(__name__)


def expected_level(parent: Optional[SubDomain]) -> int:
    """Depth a node gets under the given parent (None for a root)."""
    return 1 if parent is None else parent.level + 1


def propagate_levels(repo, sub_domain: SubDomain) -> int:
    """
    Rewrite the level of every descendant of sub_domain.

    Uses an explicit work stack so the walk does not depend on the
    interpreter's recursion limit. Only rows whose level actually changes
    are written.

    Args:
        repo: SubDomainRepository
        sub_domain: Node whose level is already correct

    Returns:
        Number of descendant rows updated
    """
    updated = 0
    stack = [(sub_domain.id, sub_domain.level)]
    visited = {sub_domain.id}

    while stack:
        parent_id, parent_level = stack.pop()
        for child in repo.get_children(parent_id):
            if child.id in visited:
                continue
            visited.add(child.id)

            child_level = parent_level + 1
            if child.level != child_level:
                child.level = child_level
                repo.save(child, update_fields=['level'])
                updated += 1
            stack.append((child.id, child_level))

    if updated:
        logger.info(
            "Propagated sub-domain levels",
            sub_domain_id=str(sub_domain.id),
            tree_level=sub_domain.level,
            descendants_updated=updated,
        )
    return updated
