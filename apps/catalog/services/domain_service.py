"""
Domain Service

Domain CRUD is plain ModelViewSet work; only deletion carries rules: a
domain that still owns sub-domains cannot be removed, and its images go
with it.
"""

from typing import List

import structlog
from django.db import transaction

from apps.common.exceptions import ConflictError, DomainNotFoundError
from ..models import Domain, Image
from .media_store import MediaStore, media_store as default_media_store, purge_files
from .subdomain_repository import SubDomainRepository, subdomain_repository
from .tree_guards import coerce_id

logger = structlog.get_logger(__name__)


class DomainService:
    """
    Service for domain operations that touch the sub-domain tree.
    """

    def __init__(self, repository: SubDomainRepository = None, media: MediaStore = None):
        self.repository = repository or subdomain_repository
        self.media = media or default_media_store

    def delete_domain(self, domain_id) -> List[str]:
        """
        Delete an empty domain and its images.

        Returns:
            Warnings for image files that could not be removed

        Raises:
            DomainNotFoundError: Domain does not exist
            ConflictError: Domain still owns sub-domains
        """
        key = coerce_id(domain_id)
        with transaction.atomic():
            domain = Domain.objects.select_for_update().filter(id=key).first() if key else None
            if domain is None:
                raise DomainNotFoundError(domain_id)

            if self.repository.domain_has_sub_domains(domain.id):
                raise ConflictError(
                    'Cannot delete domain that contains subdomains or projects',
                    'Please move or delete them first',
                    extra_data={'domain_id': str(domain.id)},
                )

            images = self.repository.list_images(Image.ENTITY_DOMAIN, [domain.id])
            file_names = [image.file.name for image in images if image.file]
            self.repository.delete_images([image.id for image in images])
            domain.delete()

        warnings = purge_files(self.media, file_names)
        logger.info("Domain deleted", domain_id=str(key), images=len(images), file_failures=len(warnings))
        return warnings


# Global instance for convenience
domain_service = DomainService()
