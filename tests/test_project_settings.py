"""
Tests for project configuration.
"""
from django.conf import settings


def test_no_cache_backend_is_configured():
    # Promotion state is re-read on every call; only Django's default cache exists
    assert not hasattr(settings, 'CACHE_BACKEND')
    assert settings.CACHES['default']['BACKEND'] == 'django.core.cache.backends.locmem.LocMemCache'


def test_api_errors_use_the_project_envelope():
    assert settings.REST_FRAMEWORK['EXCEPTION_HANDLER'] == 'apps.common.exceptions.custom_exception_handler'
