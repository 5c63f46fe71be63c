"""
WSGI config for the atolye project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'atolye.config.settings')

application = get_wsgi_application()
