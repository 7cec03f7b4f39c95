from rest_framework import serializers
from apps.catalog.models import Project
from apps.catalog.utils.slugs import generate_slug


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            'id', 'sub_domain', 'title', 'slug', 'abstract', 'block_diagram', 'specifications',
            'learning_outcomes', 'is_active', 'is_featured', 'sort_order', 'view_count',
            'lead_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'sub_domain', 'slug', 'view_count', 'lead_count', 'created_at', 'updated_at']

    def validate_title(self, value):
        value = value.strip()
        slug = generate_slug(value)
        if len(value) < 2 or not slug:
            raise serializers.ValidationError('Title must be at least 2 characters and contain letters or digits.')

        queryset = Project.objects.filter(slug=slug)
        if self.instance is not None:
            queryset = queryset.exclude(id=self.instance.id)
        if queryset.exists():
            raise serializers.ValidationError('Project with similar name already exists.')
        return value

    def create(self, validated_data):
        # sub_domain is supplied by the viewset through save()
        validated_data['slug'] = generate_slug(validated_data['title'])
        return super().create(validated_data)

    def update(self, instance, validated_data):
        if 'title' in validated_data and validated_data['title'] != instance.title:
            instance.slug = generate_slug(validated_data['title'])
        return super().update(instance, validated_data)
