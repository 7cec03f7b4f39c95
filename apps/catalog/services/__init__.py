# Services module for catalog operations

from .subdomain_repository import SubDomainRepository, subdomain_repository
from .media_store import MediaStore, StorageMediaStore, media_store, purge_files
from .subdomain_service import SubDomainService, DeletionReport, UNSET, subdomain_service
from .domain_service import DomainService, domain_service
from .project_service import ProjectService, project_service
