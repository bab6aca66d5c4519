"""
WSGI config for ActivationService.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ActivationService.settings.prod")

application = get_wsgi_application()
