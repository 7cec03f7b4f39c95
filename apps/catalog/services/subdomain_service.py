"""
SubDomain Service

Business logic for the sub-domain tree: create, update/reparent, delete
and the read-side tree and leaf listings. Every mutation runs in a single
database transaction and re-derives level and is_leaf from rows read (and
locked) inside that transaction.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings
from django.db import IntegrityError, transaction

from apps.common.exceptions import (
    CircularReferenceError,
    ConflictError,
    DomainNotFoundError,
    InvalidReferenceError,
    SubDomainNotFoundError,
    ValidationError,
)
from ..models import Domain, SubDomain
from ..utils.slugs import generate_slug
from .hierarchy import build_hierarchy
from .leaf_status import refresh_leaf_flag
from .media_store import MediaStore, media_store as default_media_store, purge_files
from .subdomain_repository import SubDomainRepository, subdomain_repository
from .subtree_deletion import delete_subtree
from .tree_guards import check_depth, coerce_id, subtree_height, would_create_cycle
from .tree_levels import expected_level, propagate_levels

logger = structlog.get_logger(__name__)

# Marks "parent not supplied" as distinct from "parent is None" (make root)
UNSET = object()

UPDATABLE_FIELDS = ('title', 'description', 'is_active', 'sort_order')


@dataclass
class DeletionReport:
    """Outcome of delete_node. warnings lists blobs that could not be removed."""
    sub_domain_id: str
    sub_domains: int = 0
    projects: int = 0
    images: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sub_domain_id': self.sub_domain_id,
            'deleted': {
                'sub_domains': self.sub_domains,
                'projects': self.projects,
                'images': self.images,
            },
        }


class SubDomainService:
    """
    Service for sub-domain tree operations.
    """

    def __init__(
        self,
        repository: Optional[SubDomainRepository] = None,
        media: Optional[MediaStore] = None,
        max_depth: Optional[int] = None,
    ):
        self.repository = repository or subdomain_repository
        self.media = media or default_media_store
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth or getattr(settings, 'CATALOG_MAX_TREE_DEPTH', 5)

    # Lookups

    def get_sub_domain(self, sub_domain_id) -> SubDomain:
        """
        Get a sub-domain by id.

        Raises:
            SubDomainNotFoundError: If it does not exist
        """
        node_id = coerce_id(sub_domain_id)
        sub_domain = self.repository.get(node_id) if node_id else None
        if sub_domain is None:
            raise SubDomainNotFoundError(sub_domain_id)
        return sub_domain

    def _lock_sub_domain(self, sub_domain_id) -> SubDomain:
        node_id = coerce_id(sub_domain_id)
        sub_domain = self.repository.get_for_update(node_id) if node_id else None
        if sub_domain is None:
            raise SubDomainNotFoundError(sub_domain_id)
        return sub_domain

    def _get_domain(self, domain_id, active_only: bool) -> Domain:
        key = coerce_id(domain_id)
        domain = self.repository.get_domain(key) if key else None
        if domain is None or (active_only and not domain.is_active):
            raise DomainNotFoundError(domain_id)
        return domain

    def _lock_parent(self, parent_id, domain_id) -> SubDomain:
        key = coerce_id(parent_id)
        parent = self.repository.get_for_update(key) if key else None
        if parent is None or parent.domain_id != domain_id:
            raise InvalidReferenceError(
                'Parent subdomain not found or not in the same domain',
                extra_data={'parent_id': str(parent_id), 'domain_id': str(domain_id)},
            )
        return parent

    # Validation helpers

    def _slug_for(self, title: str) -> str:
        slug = generate_slug(title)
        if len(title) < 2 or not slug:
            raise ValidationError(
                'Invalid subdomain title',
                'Title must be at least 2 characters and contain letters or digits',
                extra_data={'title': title},
            )
        return slug

    def _ensure_unique(self, domain_id, title: str, slug: str, exclude_id=None) -> None:
        if self.repository.find_by_title(domain_id, title, exclude_id=exclude_id):
            raise ConflictError(
                'SubDomain with this title already exists in this domain',
                extra_data={'title': title},
            )
        if self.repository.find_by_slug(domain_id, slug, exclude_id=exclude_id):
            raise ConflictError(
                'SubDomain with similar name already exists in this domain',
                extra_data={'slug': slug},
            )

    # Mutations

    def create_node(
        self,
        domain_id,
        title: str,
        parent_id=None,
        description: Optional[str] = None,
        is_active: bool = True,
        sort_order: int = 0,
    ) -> SubDomain:
        """
        Create a sub-domain, as a root or under a parent in the same domain.

        The new sub-domain is a leaf; its parent (if any) stops being one.

        Raises:
            DomainNotFoundError: Domain missing or inactive
            InvalidReferenceError: Parent missing or in another domain
            DepthExceededError: Parent is already at the maximum depth
            ConflictError: Title or slug already used in the domain
            ValidationError: Title unusable
        """
        title = (title or '').strip()
        slug = self._slug_for(title)

        try:
            with transaction.atomic():
                domain = self._get_domain(domain_id, active_only=True)

                parent = None
                if parent_id is not None:
                    parent = self._lock_parent(parent_id, domain.id)
                level = expected_level(parent)
                check_depth(level, self.max_depth)

                self._ensure_unique(domain.id, title, slug)

                sub_domain = self.repository.create(
                    domain=domain,
                    parent=parent,
                    title=title,
                    slug=slug,
                    description=description,
                    level=level,
                    is_leaf=True,
                    is_active=is_active,
                    sort_order=sort_order,
                )
                if parent is not None:
                    refresh_leaf_flag(self.repository, parent.id)
        except IntegrityError as e:
            # Lost a race against a concurrent create with the same slug
            raise ConflictError('SubDomain with similar name already exists in this domain', str(e))

        logger.info(
            "SubDomain created",
            sub_domain_id=str(sub_domain.id),
            domain_id=str(domain.id),
            parent_id=str(parent.id) if parent else None,
            tree_level=level,
        )
        return sub_domain

    def update_node(self, sub_domain_id, fields: Dict[str, Any], parent_id=UNSET) -> SubDomain:
        """
        Update descriptive fields and, optionally, move the sub-domain.

        Args:
            sub_domain_id: Sub-domain to update
            fields: Any of title, description, is_active, sort_order
            parent_id: New parent id, None to make it a root, UNSET to keep it

        Raises:
            SubDomainNotFoundError, ValidationError, ConflictError,
            InvalidReferenceError, CircularReferenceError, DepthExceededError
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                'Unsupported subdomain fields',
                f'Cannot update: {", ".join(sorted(unknown))}',
                extra_data={'fields': sorted(unknown)},
            )

        try:
            with transaction.atomic():
                sub_domain = self._lock_sub_domain(sub_domain_id)
                changed = self._apply_fields(sub_domain, fields)

                move = None
                if parent_id is not UNSET and not self._same_parent(sub_domain, parent_id):
                    move = self._apply_move(sub_domain, parent_id)
                    changed.extend(['parent', 'level'])

                if changed:
                    self.repository.save(sub_domain, update_fields=changed)

                if move is not None:
                    old_parent_id, old_level = move
                    descendants = 0
                    if sub_domain.level != old_level:
                        descendants = propagate_levels(self.repository, sub_domain)
                    refresh_leaf_flag(self.repository, sub_domain.parent_id)
                    if old_parent_id != sub_domain.parent_id:
                        refresh_leaf_flag(self.repository, old_parent_id)

                    logger.info(
                        "SubDomain reparented",
                        sub_domain_id=str(sub_domain.id),
                        old_parent_id=str(old_parent_id) if old_parent_id else None,
                        new_parent_id=str(sub_domain.parent_id) if sub_domain.parent_id else None,
                        old_level=old_level,
                        new_level=sub_domain.level,
                        descendants_updated=descendants,
                    )
        except IntegrityError as e:
            raise ConflictError('SubDomain with similar name already exists in this domain', str(e))

        if changed:
            logger.info("SubDomain updated", sub_domain_id=str(sub_domain.id), fields=changed)
        return sub_domain

    def reparent_node(self, sub_domain_id, new_parent_id) -> SubDomain:
        """Move a sub-domain under new_parent_id (None makes it a root)."""
        return self.update_node(sub_domain_id, {}, parent_id=new_parent_id)

    def _apply_fields(self, sub_domain: SubDomain, fields: Dict[str, Any]) -> List[str]:
        changed = []

        if 'title' in fields:
            title = (fields['title'] or '').strip()
            if title != sub_domain.title:
                slug = self._slug_for(title)
                self._ensure_unique(sub_domain.domain_id, title, slug, exclude_id=sub_domain.id)
                sub_domain.title = title
                sub_domain.slug = slug
                changed.extend(['title', 'slug'])

        for name in ('description', 'is_active', 'sort_order'):
            if name in fields and getattr(sub_domain, name) != fields[name]:
                setattr(sub_domain, name, fields[name])
                changed.append(name)

        return changed

    def _same_parent(self, sub_domain: SubDomain, parent_id) -> bool:
        if parent_id is None:
            return sub_domain.parent_id is None
        key = coerce_id(parent_id)
        if key is None:
            raise InvalidReferenceError(
                'Parent subdomain not found or not in the same domain',
                extra_data={'parent_id': str(parent_id)},
            )
        return key == sub_domain.parent_id

    def _apply_move(self, sub_domain: SubDomain, parent_id):
        """
        Validate a parent change and set parent and level on the instance.

        Returns:
            (old_parent_id, old_level)
        """
        new_parent = None
        if parent_id is not None:
            new_parent = self._lock_parent(parent_id, sub_domain.domain_id)
            if would_create_cycle(self.repository, sub_domain.id, new_parent.id):
                logger.info(
                    "SubDomain reparent refused: circular reference",
                    sub_domain_id=str(sub_domain.id),
                    parent_id=str(new_parent.id),
                )
                raise CircularReferenceError(sub_domain.id, new_parent.id)

        new_level = expected_level(new_parent)
        deepest = new_level + subtree_height(self.repository, sub_domain.id) - 1
        check_depth(deepest, self.max_depth)

        old_parent_id, old_level = sub_domain.parent_id, sub_domain.level
        sub_domain.parent = new_parent
        sub_domain.level = new_level
        return old_parent_id, old_level

    def delete_node(self, sub_domain_id, force: bool = False) -> DeletionReport:
        """
        Delete a sub-domain.

        Without force, a sub-domain that still has children or projects is
        refused. With force, the whole subtree goes: every descendant, their
        projects and all their images. Records are removed in one
        transaction; image files are purged after commit and failures there
        come back as warnings on the report.

        Raises:
            SubDomainNotFoundError: Sub-domain does not exist (also on a repeated delete)
            ConflictError: Children or projects present and force not set
        """
        with transaction.atomic():
            sub_domain = self._lock_sub_domain(sub_domain_id)
            children_count = self.repository.count_children(sub_domain.id)
            has_projects = self.repository.has_projects(sub_domain.id)

            if (children_count or has_projects) and not force:
                logger.info(
                    "SubDomain delete refused: has children or projects",
                    sub_domain_id=str(sub_domain.id),
                    children_count=children_count,
                    has_projects=has_projects,
                )
                raise ConflictError(
                    'Cannot delete subdomain that contains children or projects',
                    'Move or delete them first, or pass force=true to delete the whole subtree',
                    extra_data={'children_count': children_count, 'has_projects': has_projects},
                )

            parent_id = sub_domain.parent_id
            removed = delete_subtree(self.repository, sub_domain.id)
            refresh_leaf_flag(self.repository, parent_id)

        warnings = purge_files(self.media, removed.file_names)
        report = DeletionReport(
            sub_domain_id=str(sub_domain.id),
            sub_domains=removed.sub_domains,
            projects=removed.projects,
            images=removed.images,
            warnings=warnings,
        )
        logger.info(
            "SubDomain deleted",
            sub_domain_id=report.sub_domain_id,
            parent_id=str(parent_id) if parent_id else None,
            force=force,
            sub_domains=report.sub_domains,
            projects=report.projects,
            images=report.images,
            file_failures=len(warnings),
        )
        return report

    # Reads

    def get_tree(self, domain_id, include_projects: bool = False, active_only: bool = True) -> Dict[str, Any]:
        """
        Nested sub-domain hierarchy of one domain.

        Raises:
            DomainNotFoundError: Domain does not exist
        """
        domain = self._get_domain(domain_id, active_only=False)
        sub_domains = self.repository.list_by_domain(domain.id, active_only=active_only)

        projects_by_node = None
        if include_projects:
            projects_by_node = defaultdict(list)
            for project in self.repository.list_project_summaries(domain.id):
                node_id = project.pop('sub_domain_id')
                project['id'] = str(project['id'])
                projects_by_node[node_id].append(project)

        return {
            'domain': {'id': str(domain.id), 'title': domain.title, 'slug': domain.slug},
            'sub_domains': build_hierarchy(sub_domains, projects_by_node),
        }

    def list_leaves(self, domain_id=None):
        """
        Active leaf sub-domains (where projects can be attached), annotated
        with project_count. domain_id narrows the listing to one domain.
        """
        key = None
        if domain_id:
            key = coerce_id(domain_id)
            if key is None:
                raise DomainNotFoundError(domain_id)
        return self.repository.list_leaves(key)


# Global instance for convenience
subdomain_service = SubDomainService()
