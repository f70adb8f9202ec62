from sqlalchemy import select

from app.models import TranslatorProfile
from tests.helpers import auth_header, create_and_login


def _profile_id(db_session, user_id):
    return db_session.scalar(select(TranslatorProfile.id).where(TranslatorProfile.user_id == user_id))


# ---------- Rating ----------

def test_rating_create_update_delete(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    author = create_and_login(client, db_session)
    stranger = create_and_login(client, db_session)
    profile_id = _profile_id(db_session, translator["user_id"])

    r = client.post(
        "/api/ratings",
        json={"translatorProfileId": profile_id, "score": 3, "comment": "ok"},
        headers=auth_header(author["access"]),
    )
    assert r.status_code == 201, r.text
    rating = r.json()
    assert rating["userId"] == author["user_id"]

    r = client.put(f"/api/ratings/{rating['id']}", json={"score": 1}, headers=auth_header(stranger["access"]))
    assert r.status_code == 403, r.text

    r = client.put(f"/api/ratings/{rating['id']}", json={"score": 5}, headers=auth_header(author["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["score"] == 5
    assert r.json()["comment"] == "ok"

    r = client.get(f"/api/ratings?translatorProfileId={profile_id}", headers=auth_header(stranger["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 1

    r = client.delete(f"/api/ratings/{rating['id']}", headers=auth_header(author["access"]))
    assert r.status_code == 204, r.text


def test_rating_score_out_of_range_is_422(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    author = create_and_login(client, db_session)
    profile_id = _profile_id(db_session, translator["user_id"])

    r = client.post(
        "/api/ratings",
        json={"translatorProfileId": profile_id, "score": 6},
        headers=auth_header(author["access"]),
    )
    assert r.status_code == 422, r.text
    assert r.json()["errors"][0]["field"] == "score"


def test_rating_unknown_profile_is_404(client, db_session):
    author = create_and_login(client, db_session)

    r = client.post(
        "/api/ratings",
        json={"translatorProfileId": 999999, "score": 4},
        headers=auth_header(author["access"]),
    )
    assert r.status_code == 404, r.text


# ---------- Call ----------

def test_call_lifecycle_for_participants(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    caller = create_and_login(client, db_session)
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    outsider = create_and_login(client, db_session)

    r = client.post(
        "/api/calls",
        json={"recipientId": translator["user_id"], "channelName": "room-1"},
        headers=auth_header(caller["access"]),
    )
    assert r.status_code == 201, r.text
    call = r.json()
    assert call["callerId"] == caller["user_id"]
    assert call["callStatus"] == "CONNECT_NOT_SET"
    assert call["isEndCall"] is False

    r = client.get(f"/api/calls/{call['id']}", headers=auth_header(translator["access"]))
    assert r.status_code == 200, r.text

    r = client.get(f"/api/calls/{call['id']}", headers=auth_header(outsider["access"]))
    assert r.status_code == 403, r.text

    r = client.put(
        f"/api/calls/{call['id']}",
        json={"callStatus": "SUCCESSFUL", "duration": 120, "isEndCall": True, "translatorHasJoined": True},
        headers=auth_header(translator["access"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["duration"] == 120
    assert r.json()["isEndCall"] is True

    r = client.get("/api/calls", headers=auth_header(outsider["access"]))
    assert r.json()["total"] == 0
    r = client.get("/api/calls", headers=auth_header(caller["access"]))
    assert r.json()["total"] == 1

    r = client.delete(f"/api/calls/{call['id']}", headers=auth_header(caller["access"]))
    assert r.status_code == 403, r.text
    r = client.delete(f"/api/calls/{call['id']}", headers=auth_header(admin["access"]))
    assert r.status_code == 204, r.text


def test_call_to_self_is_422(client, db_session):
    user = create_and_login(client, db_session)

    r = client.post("/api/calls", json={"recipientId": user["user_id"]}, headers=auth_header(user["access"]))
    assert r.status_code == 422, r.text
    assert r.json()["errors"][0]["field"] == "recipientId"


def test_call_negative_duration_is_422(client, db_session):
    caller = create_and_login(client, db_session)
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    call = client.post(
        "/api/calls", json={"recipientId": translator["user_id"]}, headers=auth_header(caller["access"])
    ).json()

    r = client.put(f"/api/calls/{call['id']}", json={"duration": -1}, headers=auth_header(caller["access"]))
    assert r.status_code == 422, r.text


def test_user_cannot_create_call_as_someone_else(client, db_session):
    user = create_and_login(client, db_session)
    other = create_and_login(client, db_session)
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))

    r = client.post(
        "/api/calls",
        json={"callerId": other["user_id"], "recipientId": translator["user_id"]},
        headers=auth_header(user["access"]),
    )
    assert r.status_code == 403, r.text
