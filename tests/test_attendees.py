from tests.conftest import API


def _attendee_url(event_id, user_id):
    return f"{API}/events/{event_id}/attendees/{user_id}"


def test_add_attendee_then_conflict(client, make_user, make_event):
    _, owner_headers = make_user("a@b.com")
    guest, _ = make_user("b@b.com", "Bob")
    event = make_event(owner_headers)

    first = client.post(_attendee_url(event["id"], guest["id"]), headers=owner_headers)
    second = client.post(_attendee_url(event["id"], guest["id"]), headers=owner_headers)

    assert first.status_code == 201, first.text
    body = first.json()
    assert body["eventId"] == event["id"]
    assert body["userId"] == guest["id"]
    assert body["id"] > 0
    assert second.status_code == 409
    assert second.json() == {"status": "fail", "error": "Attendee exists"}


def test_non_owner_cannot_add_attendee(client, make_user, make_event):
    _, owner_headers = make_user("a@b.com")
    other, other_headers = make_user("b@b.com", "Bob")
    event = make_event(owner_headers)

    resp = client.post(_attendee_url(event["id"], other["id"]), headers=other_headers)

    assert resp.status_code == 403
    assert client.get(f"{API}/events/{event['id']}/attendees").json() == []


def test_add_attendee_requires_auth(client, make_user, make_event):
    guest, headers = make_user("a@b.com")
    event = make_event(headers)

    resp = client.post(_attendee_url(event["id"], guest["id"]))

    assert resp.status_code == 401


def test_add_attendee_missing_event_or_user(client, make_user, make_event):
    user, headers = make_user("a@b.com")
    event = make_event(headers)

    missing_event = client.post(_attendee_url(999, user["id"]), headers=headers)
    missing_user = client.post(_attendee_url(event["id"], 999), headers=headers)

    assert missing_event.status_code == 404
    assert missing_event.json()["error"] == "event not found"
    assert missing_user.status_code == 404
    assert missing_user.json()["error"] == "user not found"


def test_add_attendee_malformed_ids(client, make_user):
    _, headers = make_user("a@b.com")

    assert client.post(_attendee_url("abc", 1), headers=headers).status_code == 400
    assert client.post(_attendee_url(1, "abc"), headers=headers).status_code == 400


def test_rosters_in_both_directions(client, make_user, make_event):
    owner, owner_headers = make_user("a@b.com")
    guest, _ = make_user("b@b.com", "Bob")
    first = make_event(owner_headers)
    second = make_event(owner_headers, name="Rust meetup")
    for event in (first, second):
        client.post(_attendee_url(event["id"], guest["id"]), headers=owner_headers)
    client.post(_attendee_url(first["id"], owner["id"]), headers=owner_headers)

    attendees = client.get(f"{API}/events/{first['id']}/attendees")
    events = client.get(f"{API}/attendees/{guest['id']}/events")

    assert attendees.status_code == 200
    assert attendees.json() == [guest, owner]
    assert all("password" not in user for user in attendees.json())
    assert events.status_code == 200
    assert events.json() == [first, second]


def test_delete_attendee_removes_from_both_rosters(client, make_user, make_event):
    _, owner_headers = make_user("a@b.com")
    guest, _ = make_user("b@b.com", "Bob")
    event = make_event(owner_headers)
    client.post(_attendee_url(event["id"], guest["id"]), headers=owner_headers)

    resp = client.delete(_attendee_url(event["id"], guest["id"]), headers=owner_headers)

    assert resp.status_code == 204
    assert resp.content == b""
    assert client.get(f"{API}/events/{event['id']}/attendees").json() == []
    assert client.get(f"{API}/attendees/{guest['id']}/events").json() == []


def test_delete_absent_attendee_is_no_op(client, make_user, make_event):
    guest, headers = make_user("a@b.com")
    event = make_event(headers)

    resp = client.delete(_attendee_url(event["id"], guest["id"]), headers=headers)

    assert resp.status_code == 204


def test_non_owner_cannot_delete_attendee(client, make_user, make_event):
    _, owner_headers = make_user("a@b.com")
    guest, guest_headers = make_user("b@b.com", "Bob")
    event = make_event(owner_headers)
    client.post(_attendee_url(event["id"], guest["id"]), headers=owner_headers)

    resp = client.delete(_attendee_url(event["id"], guest["id"]), headers=guest_headers)

    assert resp.status_code == 403
    assert client.get(f"{API}/events/{event['id']}/attendees").json() == [guest]


def test_delete_attendee_missing_event(client, make_user):
    guest, headers = make_user("a@b.com")

    resp = client.delete(_attendee_url(999, guest["id"]), headers=headers)

    assert resp.status_code == 404


def test_deleting_event_clears_attendance(client, make_user, make_event):
    _, owner_headers = make_user("a@b.com")
    guest, _ = make_user("b@b.com", "Bob")
    event = make_event(owner_headers)
    client.post(_attendee_url(event["id"], guest["id"]), headers=owner_headers)

    client.delete(f"{API}/events/{event['id']}", headers=owner_headers)

    assert client.get(f"{API}/attendees/{guest['id']}/events").json() == []
