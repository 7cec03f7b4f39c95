from rest_framework import serializers
from apps.catalog.models import Domain
from apps.catalog.utils.slugs import generate_slug


class DomainSerializer(serializers.ModelSerializer):
    sub_domain_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Domain
        fields = [
            'id', 'title', 'slug', 'description', 'is_active', 'sort_order',
            'sub_domain_count', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'slug', 'created_at', 'updated_at']

    def validate_title(self, value):
        value = value.strip()
        slug = generate_slug(value)
        if len(value) < 2 or not slug:
            raise serializers.ValidationError('Title must be at least 2 characters and contain letters or digits.')

        queryset = Domain.objects.filter(slug=slug)
        if self.instance is not None:
            queryset = queryset.exclude(id=self.instance.id)
        if queryset.exists():
            raise serializers.ValidationError('Domain with similar name already exists.')
        return value

    def update(self, instance, validated_data):
        # Slug follows the title
        if 'title' in validated_data and validated_data['title'] != instance.title:
            instance.slug = generate_slug(validated_data['title'])
        return super().update(instance, validated_data)


class DomainSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Domain
        fields = ['id', 'title', 'slug']
