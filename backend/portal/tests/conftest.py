import pytest
from django.core.cache import cache

from rtw.celery import app as celery_app


@pytest.fixture(autouse=True)
def _isolated_cache():
    # Tag versions live in the cache and survive database rollbacks
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True, scope='session')
def _eager_celery():
    celery_app.conf.task_always_eager = True
    yield
