import asyncio
import datetime as dt
import sqlite3

import pytest

from event_api.app.core.db import MIGRATIONS, get_connection, get_cursor, init_db
from event_api.app.core.exceptions import (
    DuplicateAttendeeError,
    NoRowsAffectedError,
    QueryTimeoutError,
)
from event_api.app.schemas.event import EventCreate, EventUpdate
from event_api.app.schemas.user import UserCreate
from event_api.app.services.attendee_service import AttendeeService
from event_api.app.services.event_service import EventService
from event_api.app.services.user_service import UserService


def run(coro):
    return asyncio.run(coro)


def _user(email="ann@mail.com", name="Ann"):
    return run(UserService.insert(UserCreate(email=email, password="password1", name=name), "$2b$hash"))


def _event(owner_id, name="Go meetup"):
    data = EventCreate(
        name=name,
        description="Monthly meetup for Go developers",
        date=dt.date(2025, 9, 1),
        location="Hanoi",
    )
    return run(EventService.insert(data, owner_id))


def test_init_db_is_idempotent(db_path):
    init_db()

    conn = get_connection()
    try:
        versions = [row["version"] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
    finally:
        conn.close()
    assert versions == [version for version, _ in MIGRATIONS]


def test_cursor_interrupts_slow_query(db_path):
    endless = "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c) SELECT count(*) FROM c"

    with pytest.raises(QueryTimeoutError):
        with get_cursor(timeout=0.05) as cursor:
            cursor.execute(endless).fetchone()


def test_cursor_rolls_back_on_error(db_path):
    with pytest.raises(RuntimeError):
        with get_cursor() as cursor:
            cursor.execute("INSERT INTO users (email, name, password) VALUES ('a@b.com', 'Ann', 'x')")
            raise RuntimeError("boom")

    assert run(UserService.get_by_email("a@b.com")) is None


def test_user_insert_and_lookups(db_path):
    user = _user()

    assert user.id > 0
    assert run(UserService.get(user.id)) == user
    stored = run(UserService.get_by_email("ann@mail.com"))
    assert stored.id == user.id
    assert stored.password == "$2b$hash"
    assert run(UserService.get(user.id + 100)) is None
    assert run(UserService.get_by_email("nobody@mail.com")) is None


def test_duplicate_email_violates_constraint(db_path):
    _user()

    with pytest.raises(sqlite3.IntegrityError):
        _user()


def test_event_crud(db_path):
    owner = _user()
    event = _event(owner.id)

    assert event.owner_id == owner.id
    assert run(EventService.get(event.id)) == event
    assert run(EventService.get_all()) == [event]

    updated = run(EventService.update(
        event.id,
        EventUpdate(
            name="Python meetup",
            description="Monthly meetup for Python developers",
            date=dt.date(2025, 10, 1),
            location="Da Nang",
        ),
    ))
    assert updated.id == event.id
    assert updated.owner_id == owner.id
    assert updated.name == "Python meetup"
    assert updated.date == dt.date(2025, 10, 1)

    run(EventService.delete(event.id))
    assert run(EventService.get(event.id)) is None
    assert run(EventService.get_all()) == []


def test_update_and_delete_missing_event_affect_no_rows(db_path):
    data = EventUpdate(
        name="Nothing",
        description="There is no such event",
        date=dt.date(2025, 1, 1),
        location="Nowhere",
    )

    with pytest.raises(NoRowsAffectedError):
        run(EventService.update(999, data))
    with pytest.raises(NoRowsAffectedError):
        run(EventService.delete(999))


def test_event_requires_existing_owner(db_path):
    with pytest.raises(sqlite3.IntegrityError):
        _event(owner_id=999)


def test_attendee_pairing(db_path):
    owner = _user()
    guest = _user("bob@mail.com", "Bob")
    event = _event(owner.id)

    assert run(AttendeeService.get_by_event_and_attendee(event.id, guest.id)) is None

    attendee = run(AttendeeService.insert(event.id, guest.id))
    assert attendee.event_id == event.id
    assert attendee.user_id == guest.id
    assert run(AttendeeService.get_by_event_and_attendee(event.id, guest.id)) == attendee
    assert run(AttendeeService.get_attendees_by_event(event.id)) == [guest]
    assert run(EventService.get_by_attendee(guest.id)) == [event]

    with pytest.raises(DuplicateAttendeeError):
        run(AttendeeService.insert(event.id, guest.id))

    run(AttendeeService.delete(event.id, guest.id))
    assert run(AttendeeService.get_attendees_by_event(event.id)) == []
    assert run(EventService.get_by_attendee(guest.id)) == []


def test_attendee_requires_existing_event(db_path):
    guest = _user()

    with pytest.raises(sqlite3.IntegrityError):
        run(AttendeeService.insert(999, guest.id))


def test_deleting_event_removes_its_attendees(db_path):
    owner = _user()
    guest = _user("bob@mail.com", "Bob")
    event = _event(owner.id)
    run(AttendeeService.insert(event.id, guest.id))

    run(EventService.delete(event.id))

    assert run(AttendeeService.get_by_event_and_attendee(event.id, guest.id)) is None
    assert run(EventService.get_by_attendee(guest.id)) == []
