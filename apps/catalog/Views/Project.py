from django.db import transaction
from rest_framework.viewsets import ModelViewSet
from rest_framework.permissions import AllowAny, IsAuthenticated
from apps.catalog.models import Project
from apps.catalog.Serializers import ProjectSerializer
from apps.catalog.services import project_service, subdomain_service
from apps.common.responses import success_response


class ProjectViewSet(ModelViewSet):
    """Projects attached to one sub-domain (nested under /subdomains/{id}/projects/)"""
    serializer_class = ProjectSerializer
    search_fields = ['title', 'abstract']
    ordering_fields = ['sort_order', 'title', 'created_at', 'view_count']
    ordering = ['sort_order', '-created_at']

    def get_permissions(self):
        if self.action in ('list', 'retrieve'):
            permission_classes = [AllowAny]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def get_sub_domain(self):
        """Get the sub-domain from URL kwargs"""
        return subdomain_service.get_sub_domain(self.kwargs.get('subdomain_pk'))

    def get_queryset(self):
        sub_domain = self.get_sub_domain()
        return Project.objects.filter(sub_domain=sub_domain)

    def get_object(self):
        project = project_service.get_project_for_sub_domain(
            self.kwargs.get('subdomain_pk'),
            self.kwargs.get('pk'),
        )
        self.check_object_permissions(self.request, project)
        return project

    def perform_create(self, serializer):
        # Lock held until the insert commits; projects only go on leaves
        with transaction.atomic():
            sub_domain = project_service.lock_leaf_sub_domain(self.kwargs.get('subdomain_pk'))
            serializer.save(sub_domain=sub_domain)

    def destroy(self, request, subdomain_pk=None, pk=None):
        """Delete a project and its images"""
        project = self.get_object()
        warnings = project_service.delete_project(project)
        message = 'Project deleted with warnings' if warnings else 'Project deleted successfully'
        return success_response(message=message, warnings=warnings)
