"""
SubDomain Repository

The only place where the tree services touch the ORM. Holds no business
rules: lookups return None when a row is missing and callers decide what
that means.
"""

from typing import Iterable, List, Optional

from django.db.models import Count, Q, QuerySet

from ..models import Domain, Image, Project, SubDomain


class SubDomainRepository:
    """
    Persistence boundary for sub-domains and the records hanging off them
    (projects and images) that a cascade delete has to remove.
    """

    # Sub-domains

    def get(self, sub_domain_id) -> Optional[SubDomain]:
        return SubDomain.objects.filter(id=sub_domain_id).first()

    def get_for_update(self, sub_domain_id) -> Optional[SubDomain]:
        """Fetch a row and lock it until the surrounding transaction ends."""
        return SubDomain.objects.select_for_update().filter(id=sub_domain_id).first()

    def get_parent_id(self, sub_domain_id):
        """
        Return (found, parent_id) for a sub-domain without loading the full row.
        """
        rows = list(SubDomain.objects.filter(id=sub_domain_id).values_list('parent_id', flat=True)[:1])
        if not rows:
            return False, None
        return True, rows[0]

    def get_children(self, sub_domain_id) -> List[SubDomain]:
        return list(SubDomain.objects.filter(parent_id=sub_domain_id).order_by('sort_order', 'title'))

    def get_child_ids(self, sub_domain_id) -> List:
        return list(SubDomain.objects.filter(parent_id=sub_domain_id).values_list('id', flat=True))

    def count_children(self, sub_domain_id) -> int:
        return SubDomain.objects.filter(parent_id=sub_domain_id).count()

    def list_by_domain(self, domain_id, active_only: bool = False) -> List[SubDomain]:
        queryset = SubDomain.objects.filter(domain_id=domain_id)
        if active_only:
            queryset = queryset.filter(is_active=True)
        return list(queryset.order_by('level', 'sort_order', 'title'))

    def list_leaves(self, domain_id=None) -> QuerySet:
        queryset = SubDomain.objects.filter(is_leaf=True, is_active=True)
        if domain_id:
            queryset = queryset.filter(domain_id=domain_id)
        return (
            queryset
            .select_related('domain')
            .annotate(project_count=Count('projects', filter=Q(projects__is_active=True)))
            .order_by('domain__sort_order', 'domain__title', 'level', 'sort_order', 'title')
        )

    def find_by_title(self, domain_id, title: str, exclude_id=None) -> Optional[SubDomain]:
        queryset = SubDomain.objects.filter(domain_id=domain_id, title__iexact=title.strip())
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.first()

    def find_by_slug(self, domain_id, slug: str, exclude_id=None) -> Optional[SubDomain]:
        queryset = SubDomain.objects.filter(domain_id=domain_id, slug=slug)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.first()

    def create(self, **fields) -> SubDomain:
        return SubDomain.objects.create(**fields)

    def save(self, sub_domain: SubDomain, update_fields: Optional[Iterable[str]] = None) -> SubDomain:
        if update_fields is not None:
            update_fields = list(update_fields)
            if 'updated_at' not in update_fields:
                update_fields.append('updated_at')
        sub_domain.save(update_fields=update_fields)
        return sub_domain

    def delete(self, sub_domain_id) -> int:
        deleted, _ = SubDomain.objects.filter(id=sub_domain_id).delete()
        return deleted

    # Domains

    def get_domain(self, domain_id) -> Optional[Domain]:
        return Domain.objects.filter(id=domain_id).first()

    def domain_has_sub_domains(self, domain_id) -> bool:
        return SubDomain.objects.filter(domain_id=domain_id).exists()

    # Content and media owned by sub-domains

    def list_project_ids(self, sub_domain_id) -> List:
        return list(Project.objects.filter(sub_domain_id=sub_domain_id).values_list('id', flat=True))

    def list_project_summaries(self, domain_id) -> List[dict]:
        """Active projects of a domain as plain dicts, for tree presentation."""
        return list(
            Project.objects
            .filter(sub_domain__domain_id=domain_id, is_active=True)
            .order_by('sort_order', 'title')
            .values('id', 'title', 'slug', 'is_featured', 'sub_domain_id')
        )

    def has_projects(self, sub_domain_id) -> bool:
        return Project.objects.filter(sub_domain_id=sub_domain_id).exists()

    def delete_projects(self, project_ids) -> int:
        if not project_ids:
            return 0
        deleted, _ = Project.objects.filter(id__in=project_ids).delete()
        return deleted

    def list_images(self, entity_type: str, entity_ids) -> List[Image]:
        if not entity_ids:
            return []
        return list(Image.objects.filter(entity_type=entity_type, entity_id__in=entity_ids))

    def delete_images(self, image_ids) -> int:
        if not image_ids:
            return 0
        deleted, _ = Image.objects.filter(id__in=image_ids).delete()
        return deleted


# Global instance for convenience
subdomain_repository = SubDomainRepository()
