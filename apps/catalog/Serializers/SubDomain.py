from rest_framework import serializers
from apps.catalog.models import Image, SubDomain
from .Domain import DomainSummarySerializer
from .Image import ImageSerializer


class SubDomainSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubDomain
        fields = [
            'id', 'domain', 'parent', 'title', 'slug', 'description', 'level', 'is_leaf',
            'is_active', 'sort_order', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class SubDomainSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = SubDomain
        fields = ['id', 'title', 'slug', 'level', 'is_leaf']
        read_only_fields = fields


class SubDomainListSerializer(SubDomainSerializer):
    """List row with the counts annotated by the viewset queryset"""
    domain = DomainSummarySerializer(read_only=True)
    children_count = serializers.IntegerField(read_only=True)
    project_count = serializers.IntegerField(read_only=True)

    class Meta(SubDomainSerializer.Meta):
        fields = SubDomainSerializer.Meta.fields + ['children_count', 'project_count']
        read_only_fields = fields


class SubDomainDetailSerializer(SubDomainSerializer):
    """Sub-domain with its parent, direct children, active projects and images"""
    domain = DomainSummarySerializer(read_only=True)
    parent = SubDomainSummarySerializer(read_only=True)
    children = serializers.SerializerMethodField()
    projects = serializers.SerializerMethodField()
    images = serializers.SerializerMethodField()

    class Meta(SubDomainSerializer.Meta):
        fields = SubDomainSerializer.Meta.fields + ['children', 'projects', 'images']
        read_only_fields = fields

    def get_children(self, obj):
        children = obj.children.order_by('sort_order', 'title')
        return SubDomainSummarySerializer(children, many=True).data

    def get_projects(self, obj):
        projects = obj.projects.filter(is_active=True).order_by('sort_order', 'title')
        return [
            {'id': str(p.id), 'title': p.title, 'slug': p.slug, 'is_featured': p.is_featured}
            for p in projects
        ]

    def get_images(self, obj):
        images = Image.objects.filter(entity_type=Image.ENTITY_SUB_DOMAIN, entity_id=obj.id)
        return ImageSerializer(images, many=True, context=self.context).data


class LeafSubDomainSerializer(SubDomainSerializer):
    domain = DomainSummarySerializer(read_only=True)
    project_count = serializers.IntegerField(read_only=True)

    class Meta(SubDomainSerializer.Meta):
        fields = SubDomainSerializer.Meta.fields + ['project_count']
        read_only_fields = fields


class SubDomainCreateSerializer(serializers.Serializer):
    """
    Input for creating a sub-domain. level and is_leaf are derived and not accepted.
    """
    domain = serializers.UUIDField()
    title = serializers.CharField(min_length=2, max_length=200)
    parent = serializers.UUIDField(required=False, allow_null=True, default=None)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    is_active = serializers.BooleanField(required=False, default=True)
    sort_order = serializers.IntegerField(required=False, default=0)


class SubDomainUpdateSerializer(serializers.Serializer):
    """
    Input for updating a sub-domain. Only supplied keys are applied;
    a 'parent' key (null for root) moves the sub-domain.
    """
    title = serializers.CharField(min_length=2, max_length=200, required=False)
    parent = serializers.UUIDField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    is_active = serializers.BooleanField(required=False)
    sort_order = serializers.IntegerField(required=False)


class SubDomainReparentSerializer(serializers.Serializer):
    parent = serializers.UUIDField(allow_null=True)
