"""
Project Service

Projects hang off leaf sub-domains. The service checks that a project really
belongs to the sub-domain a request names and removes project images on
delete.
"""

from typing import List

import structlog
from django.db import transaction

from apps.common.exceptions import InvalidReferenceError, NotFoundError, SubDomainNotFoundError
from ..models import Image, Project, SubDomain
from .media_store import MediaStore, media_store as default_media_store, purge_files
from .subdomain_repository import SubDomainRepository, subdomain_repository
from .tree_guards import coerce_id

logger = structlog.get_logger(__name__)


class ProjectService:
    """
    Service for project operations scoped to a sub-domain.
    """

    def __init__(self, repository: SubDomainRepository = None, media: MediaStore = None):
        self.repository = repository or subdomain_repository
        self.media = media or default_media_store

    def lock_leaf_sub_domain(self, sub_domain_id) -> SubDomain:
        """
        Lock the sub-domain a new project is attached to and check it is a leaf.

        Call inside a transaction so a concurrent child create under the same
        sub-domain waits for the project insert.

        Raises:
            SubDomainNotFoundError: Sub-domain does not exist
            InvalidReferenceError: Sub-domain has children
        """
        key = coerce_id(sub_domain_id)
        sub_domain = self.repository.get_for_update(key) if key else None
        if sub_domain is None:
            raise SubDomainNotFoundError(sub_domain_id)
        if not sub_domain.is_leaf:
            logger.info("Project create refused: sub-domain is not a leaf", sub_domain_id=str(sub_domain.id))
            raise InvalidReferenceError(
                'Projects can only be added to leaf subdomains',
                extra_data={'sub_domain_id': str(sub_domain.id)},
            )
        return sub_domain

    def get_project_for_sub_domain(self, sub_domain_id, project_id) -> Project:
        """
        Get a project and verify it is attached to sub_domain_id.

        Raises:
            NotFoundError: Project does not exist
            InvalidReferenceError: Project belongs to another sub-domain
        """
        key = coerce_id(project_id)
        project = Project.objects.filter(id=key).first() if key else None
        if project is None:
            raise NotFoundError(f'Project not found: {project_id}', resource_type='Project')
        if project.sub_domain_id != coerce_id(sub_domain_id):
            raise InvalidReferenceError(
                'Project does not belong to this subdomain',
                extra_data={
                    'project_id': str(project.id),
                    'sub_domain_id': str(sub_domain_id),
                },
            )
        return project

    def delete_project(self, project: Project) -> List[str]:
        """
        Delete a project and its images.

        Returns:
            Warnings for image files that could not be removed
        """
        with transaction.atomic():
            images = self.repository.list_images(Image.ENTITY_PROJECT, [project.id])
            file_names = [image.file.name for image in images if image.file]
            self.repository.delete_images([image.id for image in images])
            self.repository.delete_projects([project.id])

        warnings = purge_files(self.media, file_names)
        logger.info(
            "Project deleted",
            project_id=str(project.id),
            sub_domain_id=str(project.sub_domain_id),
            images=len(images),
            file_failures=len(warnings),
        )
        return warnings


# Global instance for convenience
project_service = ProjectService()
