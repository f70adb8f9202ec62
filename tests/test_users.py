"""
사용자 관리 API 테스트

- ADMIN 전용 생성 / 목록 / 삭제
- 본인 조회 / 수정, 역할 변경은 ADMIN 만
- 삭제 시 연관 데이터 함께 삭제

"""

from sqlalchemy import func, select

from app.models import Call, Deposit, Rating, RefreshToken, TranslatorProfile, UserProfile, Withdrawal
from tests.helpers import auth_header, create_and_login, create_user_in_db, random_username


def _count(db, model, *where):
    db.expire_all()
    return db.scalar(select(func.count()).select_from(model).where(*where))


def test_admin_creates_translator_with_empty_profile(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))

    r = client.post(
        "/api/users",
        json={"username": random_username(), "password": "123456", "roles": ["TRANSLATOR"]},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["roles"] == ["ROLE_TRANSLATOR"]
    assert body["isActive"] is True

    assert _count(db_session, TranslatorProfile, TranslatorProfile.user_id == body["id"]) == 1
    assert _count(db_session, UserProfile, UserProfile.user_id == body["id"]) == 1


def test_non_admin_cannot_create_or_list_users(client, db_session):
    user = create_and_login(client, db_session)

    r = client.post(
        "/api/users",
        json={"username": random_username(), "password": "123456"},
        headers=auth_header(user["access"]),
    )
    assert r.status_code == 403, r.text

    r = client.get("/api/users", headers=auth_header(user["access"]))
    assert r.status_code == 403, r.text


def test_admin_create_duplicate_username_is_409(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))

    r = client.post(
        "/api/users",
        json={"username": admin["username"], "password": "123456"},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 409, r.text


def test_list_users_is_paginated(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    for _ in range(4):
        create_user_in_db(db_session)

    r = client.get("/api/users?page=2&size=2", headers=auth_header(admin["access"]))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["total"] == 5
    assert body["page"] == 2
    assert body["size"] == 2
    assert body["pages"] == 3
    assert len(body["items"]) == 2


def test_invalid_page_size_is_422(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))

    r = client.get("/api/users?size=0", headers=auth_header(admin["access"]))
    assert r.status_code == 422, r.text
    assert r.json()["errors"][0]["field"] == "size"


def test_me_and_owner_access(client, db_session):
    alice = create_and_login(client, db_session, first_name="Alice")
    bob = create_and_login(client, db_session)

    r = client.get("/api/users/me", headers=auth_header(alice["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["firstName"] == "Alice"

    r = client.get(f"/api/users/{alice['user_id']}", headers=auth_header(alice["access"]))
    assert r.status_code == 200, r.text

    r = client.get(f"/api/users/{alice['user_id']}", headers=auth_header(bob["access"]))
    assert r.status_code == 403, r.text


def test_owner_updates_name_but_not_roles(client, db_session):
    user = create_and_login(client, db_session)
    url = f"/api/users/{user['user_id']}"

    r = client.put(url, json={"firstName": "Renamed"}, headers=auth_header(user["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["firstName"] == "Renamed"

    r = client.put(url, json={"roles": ["ADMIN"]}, headers=auth_header(user["access"]))
    assert r.status_code == 403, r.text

    r = client.put(url, json={"balance": "100.00"}, headers=auth_header(user["access"]))
    assert r.status_code == 403, r.text


def test_admin_changes_roles_and_deactivates(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)

    r = client.put(
        f"/api/users/{user['user_id']}",
        json={"roles": ["USER", "TRANSLATOR"], "isActive": False},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["roles"] == ["ROLE_TRANSLATOR", "ROLE_USER"]
    assert r.json()["isActive"] is False

    # 비활성 계정의 기존 access token 거부
    r = client.get("/api/users/me", headers=auth_header(user["access"]))
    assert r.status_code == 403, r.text


def test_get_missing_user_is_404(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))

    r = client.get("/api/users/999999", headers=auth_header(admin["access"]))
    assert r.status_code == 404, r.text
    assert r.json()["message"] == "User not found with id 999999"


def test_delete_user_removes_related_rows(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    headers = auth_header(user["access"])

    profile_id = db_session.scalar(
        select(TranslatorProfile.id).where(TranslatorProfile.user_id == translator["user_id"])
    )

    assert client.post("/api/deposits", json={"wonDecimal": "1000"}, headers=headers).status_code == 201
    assert client.post(
        "/api/withdrawals",
        json={"accountNumber": "1", "accountHolder": "Kim", "nameOfBank": "KB", "sumDecimal": "5"},
        headers=headers,
    ).status_code == 201
    assert client.post("/api/calls", json={"recipientId": translator["user_id"]}, headers=headers).status_code == 201
    assert client.post(
        "/api/ratings", json={"translatorProfileId": profile_id, "score": 5}, headers=headers
    ).status_code == 201

    r = client.delete(f"/api/users/{user['user_id']}", headers=auth_header(admin["access"]))
    assert r.status_code == 204, r.text

    uid = user["user_id"]
    assert _count(db_session, RefreshToken, RefreshToken.user_id == uid) == 0
    assert _count(db_session, Deposit, Deposit.user_id == uid) == 0
    assert _count(db_session, Withdrawal, Withdrawal.user_id == uid) == 0
    assert _count(db_session, Call, Call.caller_id == uid) == 0
    assert _count(db_session, Rating, Rating.user_id == uid) == 0
    assert _count(db_session, UserProfile, UserProfile.user_id == uid) == 0

    # 상대방 데이터는 유지
    assert _count(db_session, TranslatorProfile, TranslatorProfile.id == profile_id) == 1

    r = client.get(f"/api/users/{uid}", headers=auth_header(admin["access"]))
    assert r.status_code == 404, r.text


def test_delete_translator_removes_ratings_on_profile(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))

    profile_id = db_session.scalar(
        select(TranslatorProfile.id).where(TranslatorProfile.user_id == translator["user_id"])
    )
    r = client.post(
        "/api/ratings", json={"translatorProfileId": profile_id, "score": 4}, headers=auth_header(user["access"])
    )
    assert r.status_code == 201, r.text

    r = client.delete(f"/api/users/{translator['user_id']}", headers=auth_header(admin["access"]))
    assert r.status_code == 204, r.text

    assert _count(db_session, TranslatorProfile, TranslatorProfile.id == profile_id) == 0
    assert _count(db_session, Rating, Rating.translator_profile_id == profile_id) == 0


def test_removing_translator_role_deletes_translator_profile(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    rater = create_and_login(client, db_session)
    admin_headers = auth_header(admin["access"])

    profile_id = db_session.scalar(
        select(TranslatorProfile.id).where(TranslatorProfile.user_id == translator["user_id"])
    )
    r = client.post(
        "/api/ratings", json={"translatorProfileId": profile_id, "score": 5}, headers=auth_header(rater["access"])
    )
    assert r.status_code == 201, r.text

    r = client.put(f"/api/users/{translator['user_id']}", json={"roles": ["USER"]}, headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()["roles"] == ["ROLE_USER"]

    assert _count(db_session, TranslatorProfile, TranslatorProfile.user_id == translator["user_id"]) == 0
    assert _count(db_session, Rating, Rating.translator_profile_id == profile_id) == 0

    r = client.get("/api/translator-profiles", headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 0


def test_keeping_translator_role_keeps_profile(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))

    r = client.put(
        f"/api/users/{translator['user_id']}",
        json={"roles": ["TRANSLATOR", "USER"]},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 200, r.text

    assert _count(db_session, TranslatorProfile, TranslatorProfile.user_id == translator["user_id"]) == 1
