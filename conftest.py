"""Shared fixtures for the scheduler tests."""
from datetime import time, timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from aischedule.contracts import ReqRole, ReqShift, ScheduleRequirement
from aischedule.models import PredefineShift, Role, User


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def tomorrow():
    return timezone.localdate() + timedelta(days=1)


@pytest.fixture
def roles(db):
    return {
        'nurse': Role.objects.create(name='nurse', color='#00ff00'),
        'doctor': Role.objects.create(name='doctor', color='#0000ff'),
    }


@pytest.fixture
def predefine_shifts(db):
    return {
        'morning': PredefineShift.objects.create(name='Morning', start=time(6, 0), end=time(14, 0)),
        'day': PredefineShift.objects.create(name='Day', start=time(9, 0), end=time(17, 0)),
        'late': PredefineShift.objects.create(name='Late', start=time(14, 0), end=time(22, 0)),
        'night': PredefineShift.objects.create(name='Night', start=time(22, 0), end=time(6, 0)),
    }


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def _make_user(*user_roles, is_active=True, employee_id=None):
        counter['n'] += 1
        n = counter['n']
        user = User.objects.create(
            firstname=f"First{n}",
            surname=f"Last{n}",
            email=f"user{n}@example.com",
            employee_id=employee_id or f"EMP-{n:03d}",
            is_active=is_active,
        )
        user.roles.set(user_roles)
        return user

    return _make_user


@pytest.fixture
def requirement():
    """Build a ScheduleRequirement from ``(shift, [(role, quantity), ...])`` pairs."""

    def _requirement(day, *shifts):
        return ScheduleRequirement(
            date=day,
            shifts=[
                ReqShift(shift.id, [ReqRole(role.id, quantity) for role, quantity in role_quantities])
                for shift, role_quantities in shifts
            ],
        )

    return _requirement
