import json
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from aischedule.models import Notification, Shift

pytestmark = pytest.mark.django_db


@pytest.fixture
def requirements_file(tmp_path, roles, predefine_shifts, tomorrow):
    path = tmp_path / "requirements.json"
    path.write_text(json.dumps([{
        "date": tomorrow.isoformat(),
        "shifts": [{
            "shift_id": predefine_shifts['day'].id,
            "roles": [{"role_id": roles['nurse'].id, "quantity": 2}],
        }],
    }]))
    return path


def test_generates_schedule_from_file(requirements_file, roles, make_user):
    receiver = make_user(roles['nurse'], employee_id="RCV-1")
    make_user(roles['nurse'])
    out = StringIO()

    call_command('generate_ai_schedule', str(requirements_file), '--receiver', 'RCV-1',
                 '--seed', '3', '--max-generations', '50', stdout=out)

    assert "Schedule generated successfully (2 shifts)" in out.getvalue()
    assert Shift.objects.filter(published=False).count() == 2
    assert Notification.objects.filter(user=receiver).exists()


def test_unknown_receiver(requirements_file, roles, make_user):
    make_user(roles['nurse'])
    with pytest.raises(CommandError, match="NOPE"):
        call_command('generate_ai_schedule', str(requirements_file), '--receiver', 'NOPE', stdout=StringIO())


def test_unreadable_file(tmp_path, roles, make_user):
    make_user(roles['nurse'], employee_id="RCV-1")
    with pytest.raises(CommandError, match="Cannot read requirements"):
        call_command('generate_ai_schedule', str(tmp_path / "missing.json"), '--receiver', 'RCV-1',
                     stdout=StringIO())


def test_invalid_requirements(tmp_path, roles, make_user, predefine_shifts):
    make_user(roles['nurse'], employee_id="RCV-1")
    path = tmp_path / "past.json"
    path.write_text(json.dumps([{
        "date": "2020-01-01",
        "shifts": [{"shift_id": predefine_shifts['day'].id, "roles": [{"role_id": roles['nurse'].id, "quantity": 1}]}],
    }]))

    with pytest.raises(CommandError, match="Invalid requirements"):
        call_command('generate_ai_schedule', str(path), '--receiver', 'RCV-1', stdout=StringIO())


@pytest.mark.parametrize("entry", [
    {"date": "31-12-2030", "shifts": [{"shift_id": 1, "roles": [{"role_id": 1, "quantity": 1}]}]},
    {"date": "2030-12-31", "shifts": [{"shift_id": "late", "roles": [{"role_id": 1, "quantity": 1}]}]},
    {"date": "2030-12-31", "shifts": [{"shift_id": 1, "roles": [{"role_id": None, "quantity": 1}]}]},
    {"date": "2030-12-31", "shifts": [{"roles": [{"role_id": 1, "quantity": 1}]}]},
    "2030-12-31",
])
def test_malformed_requirements(tmp_path, roles, make_user, entry):
    make_user(roles['nurse'], employee_id="RCV-1")
    path = tmp_path / "malformed.json"
    path.write_text(json.dumps([entry]))

    with pytest.raises(CommandError, match="Invalid requirements"):
        call_command('generate_ai_schedule', str(path), '--receiver', 'RCV-1', stdout=StringIO())
