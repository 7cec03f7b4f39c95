from rest_framework import serializers
from apps.catalog.models import Image


class ImageSerializer(serializers.ModelSerializer):
    """Read-only view of an image attached to a catalog entity"""

    class Meta:
        model = Image
        fields = [
            'id', 'entity_type', 'entity_id', 'file', 'original_name', 'mime_type',
            'size', 'is_main', 'sort_order', 'alt', 'caption', 'created_at',
        ]
        read_only_fields = fields
