"""WSGI config for the venueops project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "venueops.settings")

application = get_wsgi_application()
