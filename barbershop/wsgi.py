"""
WSGI config for the barbershop booking site.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "barbershop.settings")

application = get_wsgi_application()
