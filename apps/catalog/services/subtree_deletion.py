"""
Cascade deletion of a sub-domain subtree.

Free functions taking the repository explicitly so they run inside whatever
transaction the caller opened.
"""

from dataclasses import dataclass, field
from typing import List

import structlog

from ..models import Image

logger = structlog.get_logger(__name__)


@dataclass
class SubtreeDeletion:
    """What a cascade removed. file_names are the image blobs still to purge."""
    sub_domains: int = 0
    projects: int = 0
    images: int = 0
    file_names: List[str] = field(default_factory=list)

    def merge(self, other: 'SubtreeDeletion') -> None:
        self.sub_domains += other.sub_domains
        self.projects += other.projects
        self.images += other.images
        self.file_names.extend(other.file_names)


def collect_subtree_ids(repo, sub_domain_id) -> List:
    """
    Ids of sub_domain_id and all its descendants, every node listed after
    all of its descendants (safe deletion order).
    """
    preorder = []
    seen = set()
    stack = [sub_domain_id]

    while stack:
        node_id = stack.pop()
        if node_id in seen:
            continue
        seen.add(node_id)
        preorder.append(node_id)
        stack.extend(repo.get_child_ids(node_id))

    preorder.reverse()
    return preorder


def _delete_images(repo, entity_type: str, entity_ids, result: SubtreeDeletion) -> None:
    images = repo.list_images(entity_type, entity_ids)
    if not images:
        return
    result.file_names.extend(image.file.name for image in images if image.file)
    result.images += repo.delete_images([image.id for image in images])


def delete_node_records(repo, sub_domain_id) -> SubtreeDeletion:
    """
    Delete one sub-domain's projects, their images, its own images and the
    sub-domain row. The sub-domain must not have children any more.
    """
    result = SubtreeDeletion()

    project_ids = repo.list_project_ids(sub_domain_id)
    if project_ids:
        _delete_images(repo, Image.ENTITY_PROJECT, project_ids, result)
        result.projects += repo.delete_projects(project_ids)

    _delete_images(repo, Image.ENTITY_SUB_DOMAIN, [sub_domain_id], result)
    if repo.delete(sub_domain_id):
        result.sub_domains += 1
    return result


def delete_subtree(repo, sub_domain_id) -> SubtreeDeletion:
    """
    Delete a sub-domain together with every descendant and everything
    attached to them, deepest nodes first.

    Only database records are removed; image files are returned in
    SubtreeDeletion.file_names for the caller to purge after commit.
    """
    result = SubtreeDeletion()
    for node_id in collect_subtree_ids(repo, sub_domain_id):
        result.merge(delete_node_records(repo, node_id))

    logger.info(
        "Deleted sub-domain subtree records",
        sub_domain_id=str(sub_domain_id),
        sub_domains=result.sub_domains,
        projects=result.projects,
        images=result.images,
    )
    return result
