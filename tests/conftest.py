"""
Shared fixtures for the catalog tests.
"""

import pytest
from django.core.files.base import ContentFile
from rest_framework.test import APIClient

from apps.catalog.models import Domain, Image, Project
from apps.catalog.services import subdomain_service


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded files out of the project tree."""
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="admin", password="secret-pass-123")


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def domain(db):
    return Domain.objects.create(title="Electronics")


@pytest.fixture
def other_domain(db):
    return Domain.objects.create(title="Software")


@pytest.fixture
def make_node(domain):
    """Create a sub-domain through the service, under parent if given."""
    def _make(title, parent=None, on_domain=None, **kwargs):
        return subdomain_service.create_node(
            domain_id=(on_domain or domain).id,
            title=title,
            parent_id=parent.id if parent is not None else None,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_project(db):
    def _make(sub_domain, title, **kwargs):
        return Project.objects.create(
            sub_domain=sub_domain,
            title=title,
            abstract="abstract",
            specifications="specs",
            learning_outcomes="outcomes",
            **kwargs,
        )
    return _make


@pytest.fixture
def make_image(db):
    """Create an Image row with a real file in MEDIA_ROOT."""
    def _make(entity_type, entity_id, name="photo.png"):
        image = Image(
            entity_type=entity_type,
            entity_id=entity_id,
            original_name=name,
            mime_type="image/png",
            size=3,
        )
        image.file.save(name, ContentFile(b"png"), save=True)
        return image
    return _make
