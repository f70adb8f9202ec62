"""
인증 흐름 테스트

- 로그인 성공 / 실패 및 refresh token 원장 기록 여부
- 회원 가입 (USER / TRANSLATOR 만 허용)
- 비활성 계정 / 보호된 API 접근

"""

from app.services.seed import seed_admin
from tests.helpers import auth_header, create_user_in_db, ledger_rows, login, random_username


def test_login_issues_distinct_tokens_and_records_refresh(client, db_session):
    user = create_user_in_db(db_session)

    r = client.post("/auth/login", json={"username": user.username, "password": "123456"})
    assert r.status_code == 200, r.text

    body = r.json()
    assert body["accessToken"]
    assert body["refreshToken"]
    assert body["accessToken"] != body["refreshToken"]

    rows = ledger_rows(db_session, user.id)
    assert [row.token for row in rows] == [body["refreshToken"]]


def test_login_wrong_password_is_401_and_records_nothing(client, db_session):
    user = create_user_in_db(db_session)

    r = client.post("/auth/login", json={"username": user.username, "password": "wrong-pass"})
    assert r.status_code == 401, r.text
    assert r.json()["status"] == 401
    assert "timestamp" in r.json()

    assert ledger_rows(db_session, user.id) == []


def test_login_unknown_user_is_401(client):
    r = client.post("/auth/login", json={"username": "01099999999", "password": "123456"})
    assert r.status_code == 401, r.text


def test_login_inactive_user_is_403(client, db_session):
    user = create_user_in_db(db_session, is_active=False)

    r = client.post("/auth/login", json={"username": user.username, "password": "123456"})
    assert r.status_code == 403, r.text


def test_seeded_admin_can_login_and_list_users(client, db_session):
    seed_admin(db_session)

    tokens = login(client, "01012345673", "123456")

    r = client.get("/api/users", headers=auth_header(tokens["accessToken"]))
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 1


def test_register_user_creates_user_profile(client):
    username = random_username()
    r = client.post(
        "/auth/register",
        json={"username": username, "password": "123456", "firstName": "Min", "lastName": "Kim"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["roles"] == ["ROLE_USER"]

    tokens = login(client, username)
    me = client.get("/api/user-profiles/me", headers=auth_header(tokens["accessToken"]))
    assert me.status_code == 200, me.text
    assert me.json()["isFreeCallMade"] is False


def test_register_translator_creates_empty_translator_profile(client):
    username = random_username()
    r = client.post("/auth/register", json={"username": username, "password": "123456", "role": "TRANSLATOR"})
    assert r.status_code == 201, r.text
    user_id = r.json()["id"]

    tokens = login(client, username)
    profile = client.get(f"/api/translator-profiles/user/{user_id}", headers=auth_header(tokens["accessToken"]))
    assert profile.status_code == 200, profile.text
    assert profile.json()["isAvailable"] is False
    assert profile.json()["isOnline"] is False


def test_register_as_admin_is_rejected(client):
    r = client.post("/auth/register", json={"username": random_username(), "password": "123456", "role": "ADMIN"})
    assert r.status_code == 403, r.text


def test_register_duplicate_username_is_409(client, db_session):
    user = create_user_in_db(db_session)

    r = client.post("/auth/register", json={"username": user.username, "password": "123456"})
    assert r.status_code == 409, r.text


def test_register_invalid_fields_returns_field_errors(client):
    r = client.post("/auth/register", json={"username": "abc", "password": "12"})
    assert r.status_code == 422, r.text

    fields = {e["field"] for e in r.json()["errors"]}
    assert fields == {"username", "password"}


def test_protected_api_requires_bearer_token(client):
    r = client.get("/api/users/me")
    assert r.status_code == 401, r.text

    r = client.get("/api/users/me", headers=auth_header("not-a-token"))
    assert r.status_code == 401, r.text


def test_refresh_token_cannot_be_used_as_access_token(client, db_session):
    user = create_user_in_db(db_session)
    tokens = login(client, user.username)

    r = client.get("/api/users/me", headers=auth_header(tokens["refreshToken"]))
    assert r.status_code == 401, r.text
