"""Shared pytest fixtures for strawdecor_django tests."""

import pytest
import django
from django.conf import settings


@pytest.fixture(scope="session", autouse=True)
def django_setup():
    """Configure Django settings for tests."""
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[
                "django.contrib.auth",
                "django.contrib.contenttypes",
                "strawdecor_django",
            ],
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            SECRET_KEY="test-secret-key",
            USE_TZ=True,
            STRAWDECOR={
                "DECORATE": "strawdecor.strategy:default_decorate",
                "TRACE_DECORATION": True,
            },
        )
        django.setup()


@pytest.fixture()
def users(django_setup):
    """Create the auth tables and a few users; tables are dropped with the in-memory db."""
    from django.contrib.auth.models import User
    from django.core.management import call_command

    call_command("migrate", run_syncdb=True, verbosity=0)
    User.objects.all().delete()
    for name in ("ada", "brian", "cleo"):
        User.objects.create(username=name)
    return User.objects.order_by("username")
