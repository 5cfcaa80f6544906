"""
WSGI config for the Ready to Work project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rtw.settings')

application = get_wsgi_application()
