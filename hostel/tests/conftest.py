import pytest
from django.core.cache import cache

from hostel.models import User
from hostel.services.inventory import seed_hostel
from hostel.tests.helpers import client_for


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and the floor layout live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def small_hostel(settings, db):
    """Two floors of three rooms, two beds each."""
    settings.HOSTEL_FLOOR_COUNT = 2
    settings.HOSTEL_ROOMS_PER_FLOOR = 3
    settings.HOSTEL_ROOM_CAPACITY = 2
    seed_hostel()


@pytest.fixture
def make_student(db):
    def _make(email='student@example.com', name='Asha Rao'):
        return User.objects.create_user(username=email, email=email, password='secret123',
                                        first_name=name, role=User.ROLE_STUDENT)
    return _make


@pytest.fixture
def student(make_student):
    return make_student()


@pytest.fixture
def admin_user(db, settings):
    email = settings.HOSTEL_ADMIN_EMAIL
    return User.objects.create_user(username=email, email=email, password='secret123',
                                    first_name='Warden', role=User.ROLE_ADMIN)


@pytest.fixture
def student_client(student):
    return client_for(student)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)
