"""
WSGI config for projecthub project.

It exposes the WSGI callable as a module-level variable named ``application``.
Logging is configured when the settings module is imported.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "projecthub.settings")

application = get_wsgi_application()
