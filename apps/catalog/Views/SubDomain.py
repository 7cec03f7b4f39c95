from django.db.models import Count, Q
from rest_framework.viewsets import ModelViewSet
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import AllowAny, IsAuthenticated
from apps.catalog.models import SubDomain
from apps.catalog.Serializers import (
    SubDomainSerializer,
    SubDomainListSerializer,
    SubDomainDetailSerializer,
    SubDomainCreateSerializer,
    SubDomainUpdateSerializer,
    SubDomainReparentSerializer,
    LeafSubDomainSerializer,
)
from apps.catalog.services import subdomain_service, UNSET
from apps.catalog.services.tree_guards import coerce_id
from apps.common.responses import success_response, created_response

_TRUE_VALUES = ('true', '1', 'yes')


class SubDomainPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = 'limit'
    max_page_size = 100


class SubDomainViewSet(ModelViewSet):
    """
    Sub-domain tree endpoints.

    Views only translate HTTP to service calls; tree rules (depth, cycles,
    leaf flags, cascades) live in SubDomainService and its errors are
    rendered by the custom exception handler.
    """
    serializer_class = SubDomainListSerializer
    pagination_class = SubDomainPagination
    search_fields = ['title', 'description']
    ordering_fields = ['sort_order', 'title', 'level', 'created_at']
    ordering = ['sort_order', 'title']

    def get_permissions(self):
        """Reads are public, changes require authentication."""
        if self.action in ('list', 'retrieve', 'leafs'):
            permission_classes = [AllowAny]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        queryset = SubDomain.objects.select_related('domain').annotate(
            children_count=Count('children', distinct=True),
            project_count=Count('projects', filter=Q(projects__is_active=True), distinct=True),
        )
        params = self.request.query_params

        # Malformed ids match nothing instead of failing the query
        if params.get('domain'):
            domain_id = coerce_id(params['domain'])
            queryset = queryset.filter(domain_id=domain_id) if domain_id else queryset.none()

        parent = params.get('parent')
        if parent in ('', 'null'):
            queryset = queryset.filter(parent__isnull=True)
        elif parent is not None:
            parent_id = coerce_id(parent)
            queryset = queryset.filter(parent_id=parent_id) if parent_id else queryset.none()

        is_leaf = params.get('is_leaf')
        if is_leaf is not None:
            queryset = queryset.filter(is_leaf=is_leaf.lower() in _TRUE_VALUES)

        level = params.get('level')
        if level and level.isdigit():
            queryset = queryset.filter(level=int(level))

        return queryset

    def retrieve(self, request, pk=None):
        sub_domain = subdomain_service.get_sub_domain(pk)
        serializer = SubDomainDetailSerializer(sub_domain, context={'request': request})
        return success_response(serializer.data, 'SubDomain fetched successfully')

    def create(self, request, *args, **kwargs):
        serializer = SubDomainCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        sub_domain = subdomain_service.create_node(
            domain_id=data['domain'],
            title=data['title'],
            parent_id=data.get('parent'),
            description=data.get('description'),
            is_active=data.get('is_active', True),
            sort_order=data.get('sort_order', 0),
        )
        return created_response(SubDomainSerializer(sub_domain).data, 'SubDomain created successfully')

    def update(self, request, pk=None, partial=False):
        serializer = SubDomainUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)
        parent_id = fields.pop('parent', UNSET)

        sub_domain = subdomain_service.update_node(pk, fields, parent_id=parent_id)
        return success_response(SubDomainSerializer(sub_domain).data, 'SubDomain updated successfully')

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        """
        Delete a sub-domain. ?force=true removes the whole subtree with its
        projects and images; file cleanup problems come back as warnings.
        """
        force = request.query_params.get('force', '').lower() in _TRUE_VALUES
        report = subdomain_service.delete_node(pk, force=force)
        message = 'SubDomain deleted with warnings' if report.partial else 'SubDomain deleted successfully'
        return success_response(report.to_dict(), message, warnings=report.warnings)

    @action(detail=True, methods=['post'])
    def reparent(self, request, pk=None):
        """Move a sub-domain under another parent, or to the root with parent=null"""
        serializer = SubDomainReparentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sub_domain = subdomain_service.reparent_node(pk, serializer.validated_data['parent'])
        return success_response(SubDomainSerializer(sub_domain).data, 'SubDomain moved successfully')

    @action(detail=False, methods=['get'])
    def leafs(self, request):
        """Active leaf sub-domains, the ones projects can be attached to"""
        leaves = subdomain_service.list_leaves(request.query_params.get('domain'))
        serializer = LeafSubDomainSerializer(leaves, many=True)
        return success_response(serializer.data, 'Leaf subdomains fetched successfully')
