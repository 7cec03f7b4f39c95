from django.db.models import Count
from rest_framework.viewsets import ModelViewSet, ViewSet
from rest_framework.permissions import AllowAny, IsAuthenticated
from apps.catalog.models import Domain
from apps.catalog.Serializers import DomainSerializer
from apps.catalog.services import domain_service, subdomain_service
from apps.common.responses import success_response

_TRUE_VALUES = ('true', '1', 'yes')


class DomainViewSet(ModelViewSet):
    serializer_class = DomainSerializer
    search_fields = ['title', 'description']
    ordering_fields = ['sort_order', 'title', 'created_at']
    ordering = ['sort_order', 'title']

    def get_queryset(self):
        return Domain.objects.annotate(sub_domain_count=Count('sub_domains'))

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            permission_classes = [AllowAny]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def destroy(self, request, pk=None):
        """Delete an empty domain; refused while it still owns sub-domains"""
        warnings = domain_service.delete_domain(pk)
        message = 'Domain deleted with warnings' if warnings else 'Domain deleted successfully'
        return success_response(message=message, warnings=warnings)


class DomainSubDomainTreeViewSet(ViewSet):
    """Nested sub-domain hierarchy of one domain"""
    permission_classes = [AllowAny]

    def list(self, request, domain_pk=None):
        params = request.query_params
        tree = subdomain_service.get_tree(
            domain_pk,
            include_projects=params.get('include_projects', '').lower() in _TRUE_VALUES,
            active_only=params.get('include_inactive', '').lower() not in _TRUE_VALUES,
        )
        return success_response(tree, 'SubDomains fetched successfully')
