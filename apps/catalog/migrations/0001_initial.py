# Generated manually for the catalog schema (domains, sub-domain tree, projects, images)

import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import apps.catalog.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Domain',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('title', models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(2)])),
                ('slug', models.SlugField(max_length=200, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('sort_order', models.IntegerField(default=0)),
            ],
            options={
                'db_table': 'domains',
                'ordering': ['sort_order', 'title'],
            },
        ),
        migrations.CreateModel(
            name='Image',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('entity_type', models.CharField(choices=[('domain', 'Domain'), ('subdomain', 'SubDomain'), ('project', 'Project')], max_length=20)),
                ('entity_id', models.UUIDField()),
                ('file', models.FileField(max_length=500, upload_to=apps.catalog.models.image_upload_path)),
                ('original_name', models.CharField(max_length=255)),
                ('mime_type', models.CharField(max_length=100)),
                ('size', models.PositiveIntegerField(default=0)),
                ('is_main', models.BooleanField(default=False)),
                ('sort_order', models.IntegerField(default=0)),
                ('alt', models.CharField(blank=True, max_length=255, null=True)),
                ('caption', models.CharField(blank=True, max_length=255, null=True)),
            ],
            options={
                'db_table': 'images',
                'ordering': ['sort_order', '-is_main'],
                'indexes': [
                    models.Index(fields=['entity_type', 'entity_id'], name='images_entity_idx'),
                    models.Index(fields=['entity_type', 'entity_id', 'is_main'], name='images_entity_main_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SubDomain',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('title', models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(2)])),
                ('slug', models.SlugField(max_length=200)),
                ('description', models.TextField(blank=True, null=True)),
                ('level', models.PositiveIntegerField(default=1, editable=False)),
                ('is_leaf', models.BooleanField(default=True, editable=False)),
                ('is_active', models.BooleanField(default=True)),
                ('sort_order', models.IntegerField(default=0)),
                ('domain', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sub_domains', to='catalog.domain')),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='children', to='catalog.subdomain')),
            ],
            options={
                'db_table': 'sub_domains',
                'ordering': ['level', 'sort_order', 'title'],
                'indexes': [
                    models.Index(fields=['domain', 'parent'], name='sub_domains_parent_idx'),
                    models.Index(fields=['domain', 'is_leaf'], name='sub_domains_leaf_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('domain', 'slug'), name='unique_sub_domain_slug_per_domain'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('title', models.CharField(max_length=300, validators=[django.core.validators.MinLengthValidator(2)])),
                ('slug', models.SlugField(max_length=300, unique=True)),
                ('abstract', models.TextField()),
                ('block_diagram', models.CharField(blank=True, max_length=255, null=True)),
                ('specifications', models.TextField()),
                ('learning_outcomes', models.TextField()),
                ('is_active', models.BooleanField(default=True)),
                ('is_featured', models.BooleanField(default=False)),
                ('sort_order', models.IntegerField(default=0)),
                ('view_count', models.PositiveIntegerField(default=0)),
                ('lead_count', models.PositiveIntegerField(default=0)),
                ('sub_domain', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='projects', to='catalog.subdomain')),
            ],
            options={
                'db_table': 'projects',
                'ordering': ['sort_order', '-created_at'],
            },
        ),
    ]
