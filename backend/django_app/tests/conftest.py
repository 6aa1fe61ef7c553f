import pytest
from django.contrib.auth.models import User
from django.test import Client


@pytest.fixture
def user(db):
    return User.objects.create_user(username='ada@example.com', email='ada@example.com', password='correct-horse', first_name='Ada')


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username='bob@example.com', email='bob@example.com', password='battery-staple')


@pytest.fixture
def api(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def other_api(other_user):
    client = Client()
    client.force_login(other_user)
    return client


@pytest.fixture
def anon(db):
    return Client()
