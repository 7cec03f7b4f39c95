from django.contrib import admin
from .models import Domain, SubDomain, Project, Image


@admin.register(Domain)
class DomainAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'slug', 'is_active', 'sort_order', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['title', 'slug', 'description']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(SubDomain)
class SubDomainAdmin(admin.ModelAdmin):
    """
    Tree structure (domain, parent, level, is_leaf) and title are read-only here; they are
    only changed through the API so tree and uniqueness rules are applied.
    """
    list_display = ['id', 'title', 'domain', 'parent', 'level', 'is_leaf', 'is_active', 'sort_order']
    list_filter = ['domain', 'level', 'is_leaf', 'is_active']
    search_fields = ['title', 'slug', 'domain__title']
    readonly_fields = ['id', 'domain', 'parent', 'title', 'slug', 'level', 'is_leaf', 'created_at', 'updated_at']
    fields = ['id', 'domain', 'parent', 'title', 'slug', 'description', 'level', 'is_leaf',
              'is_active', 'sort_order', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'sub_domain', 'is_active', 'is_featured', 'view_count', 'created_at']
    list_filter = ['is_active', 'is_featured', 'sub_domain__domain']
    search_fields = ['title', 'slug', 'sub_domain__title']
    readonly_fields = ['id', 'view_count', 'lead_count', 'created_at', 'updated_at']
    raw_id_fields = ['sub_domain']


@admin.register(Image)
class ImageAdmin(admin.ModelAdmin):
    list_display = ['id', 'entity_type', 'entity_id', 'original_name', 'is_main', 'created_at']
    list_filter = ['entity_type', 'is_main']
    search_fields = ['original_name', 'entity_id']
    readonly_fields = ['id', 'created_at', 'updated_at']
