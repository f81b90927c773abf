"""
WSGI config for grant_office.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "grant_office.settings")

application = get_wsgi_application()
