"""
ASGI config for formintake project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "formintake.settings")

application = get_asgi_application()
