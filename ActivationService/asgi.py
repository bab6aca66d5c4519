"""
ASGI config for ActivationService.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ActivationService.settings.prod")

application = get_asgi_application()
