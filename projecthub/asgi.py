"""
ASGI config for projecthub project.

Plain HTTP only; the catalog has no websocket consumers.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "projecthub.settings")

application = get_asgi_application()
