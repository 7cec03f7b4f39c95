from django.db.models import (
    Model, UUIDField, CharField, TextField, DateTimeField, BooleanField, IntegerField,
    PositiveIntegerField, SlugField, ForeignKey, FileField, Index, UniqueConstraint,
    PROTECT,
)
from django.core.validators import MinLengthValidator
import uuid

from apps.catalog.utils.slugs import generate_slug


class BaseModel(Model):
    id = UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = DateTimeField(auto_now_add=True)
    updated_at = DateTimeField(auto_now=True)
    class Meta:
        abstract = True
        ordering = ["-created_at"]


class Domain(BaseModel):
    """Top-level namespace owning an independent tree of sub-domains"""
    title = CharField(max_length=200, validators=[MinLengthValidator(2)])
    slug = SlugField(max_length=200, unique=True)
    description = TextField(blank=True, null=True)
    is_active = BooleanField(default=True)
    sort_order = IntegerField(default=0)

    class Meta:
        db_table = 'domains'
        ordering = ['sort_order', 'title']

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.title)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.title}({self.id})"


class SubDomain(BaseModel):
    """
    Node of the category tree inside one domain.

    level and is_leaf are derived from the parent relation and are only
    written by apps.catalog.services.
    """
    domain = ForeignKey(Domain, on_delete=PROTECT, related_name='sub_domains')
    parent = ForeignKey('self', on_delete=PROTECT, related_name='children', blank=True, null=True)
    title = CharField(max_length=200, validators=[MinLengthValidator(2)])
    slug = SlugField(max_length=200)
    description = TextField(blank=True, null=True)
    level = PositiveIntegerField(default=1, editable=False)
    is_leaf = BooleanField(default=True, editable=False)
    is_active = BooleanField(default=True)
    sort_order = IntegerField(default=0)

    class Meta:
        db_table = 'sub_domains'
        ordering = ['level', 'sort_order', 'title']
        constraints = [
            UniqueConstraint(fields=['domain', 'slug'], name='unique_sub_domain_slug_per_domain'),
        ]
        indexes = [
            Index(fields=['domain', 'parent'], name='sub_domains_parent_idx'),
            Index(fields=['domain', 'is_leaf'], name='sub_domains_leaf_idx'),
        ]

    def __str__(self):
        return f"{self.title}({self.id})"


class Project(BaseModel):
    """Catalog content attached to a sub-domain (normally a leaf)"""
    sub_domain = ForeignKey(SubDomain, on_delete=PROTECT, related_name='projects')
    title = CharField(max_length=300, validators=[MinLengthValidator(2)])
    slug = SlugField(max_length=300, unique=True)
    abstract = TextField()
    block_diagram = CharField(max_length=255, blank=True, null=True)
    specifications = TextField()
    learning_outcomes = TextField()
    is_active = BooleanField(default=True)
    is_featured = BooleanField(default=False)
    sort_order = IntegerField(default=0)
    view_count = PositiveIntegerField(default=0)
    lead_count = PositiveIntegerField(default=0)

    class Meta:
        db_table = 'projects'
        ordering = ['sort_order', '-created_at']

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug(self.title)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.title}({self.id})"


def image_upload_path(instance, filename):
    """Generate upload path for catalog images"""
    return f"images/{instance.entity_type}/{instance.entity_id}/{filename}"


class Image(BaseModel):
    """
    Media asset owned by a domain, a sub-domain or a project.

    Ownership is polymorphic: (entity_type, entity_id) instead of a foreign key,
    so owners must remove their images explicitly when they are deleted.
    """
    ENTITY_DOMAIN = 'domain'
    ENTITY_SUB_DOMAIN = 'subdomain'
    ENTITY_PROJECT = 'project'

    entity_type = CharField(max_length=20, choices=[
        (ENTITY_DOMAIN, 'Domain'),
        (ENTITY_SUB_DOMAIN, 'SubDomain'),
        (ENTITY_PROJECT, 'Project'),
    ])
    entity_id = UUIDField()
    file = FileField(upload_to=image_upload_path, max_length=500)
    original_name = CharField(max_length=255)
    mime_type = CharField(max_length=100)
    size = PositiveIntegerField(default=0)
    is_main = BooleanField(default=False)
    sort_order = IntegerField(default=0)
    alt = CharField(max_length=255, blank=True, null=True)
    caption = CharField(max_length=255, blank=True, null=True)

    class Meta:
        db_table = 'images'
        ordering = ['sort_order', '-is_main']
        indexes = [
            Index(fields=['entity_type', 'entity_id'], name='images_entity_idx'),
            Index(fields=['entity_type', 'entity_id', 'is_main'], name='images_entity_main_idx'),
        ]

    def __str__(self):
        return f"{self.entity_type}:{self.entity_id} - {self.original_name}"
