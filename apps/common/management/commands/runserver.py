"""
runserver that listens on the configured PORT by default.

``apps.common`` is listed before ``django.contrib.staticfiles`` in
INSTALLED_APPS so this command takes precedence; static file serving in
development is kept by subclassing the staticfiles variant.
"""
from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import Command as StaticfilesRunserverCommand


class Command(StaticfilesRunserverCommand):
    default_port = str(settings.PORT)
