import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rtw.settings')
app = Celery('rtw')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
