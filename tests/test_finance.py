"""
입금 / 출금 요청 테스트

- 생성은 PENDING, 본인 명의만 (ADMIN 은 대상 지정 가능)
- 목록은 ADMIN 전체 / 그 외 본인 것만
- 상태 변경 / 삭제는 ADMIN 전용

"""

from tests.helpers import auth_header, create_and_login

WITHDRAWAL = {"accountNumber": "110-123-456789", "accountHolder": "Kim", "nameOfBank": "Shinhan", "sumDecimal": "30000"}


def test_deposit_lifecycle(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)

    r = client.post(
        "/api/deposits",
        json={"accountHolder": "Kim", "nameOfBank": "KB", "coinDecimal": "10", "wonDecimal": "10000"},
        headers=auth_header(user["access"]),
    )
    assert r.status_code == 201, r.text
    deposit = r.json()
    assert deposit["status"] == "PENDING"
    assert deposit["userId"] == user["user_id"]

    # 일반 사용자는 상태 변경 불가
    r = client.put(f"/api/deposits/{deposit['id']}", json={"status": "APPROVED"}, headers=auth_header(user["access"]))
    assert r.status_code == 403, r.text

    r = client.put(f"/api/deposits/{deposit['id']}", json={"status": "APPROVED"}, headers=auth_header(admin["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "APPROVED"

    r = client.get(f"/api/deposits/{deposit['id']}", headers=auth_header(user["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "APPROVED"

    r = client.delete(f"/api/deposits/{deposit['id']}", headers=auth_header(admin["access"]))
    assert r.status_code == 204, r.text

    r = client.get(f"/api/deposits/{deposit['id']}", headers=auth_header(admin["access"]))
    assert r.status_code == 404, r.text


def test_deposit_list_is_scoped_to_owner(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    alice = create_and_login(client, db_session)
    bob = create_and_login(client, db_session)

    for session in (alice, alice, bob):
        r = client.post("/api/deposits", json={"wonDecimal": "500"}, headers=auth_header(session["access"]))
        assert r.status_code == 201, r.text

    r = client.get("/api/deposits", headers=auth_header(alice["access"]))
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 2
    assert {i["userId"] for i in r.json()["items"]} == {alice["user_id"]}

    r = client.get("/api/deposits", headers=auth_header(admin["access"]))
    assert r.json()["total"] == 3


def test_cannot_read_or_create_deposit_for_another_user(client, db_session):
    alice = create_and_login(client, db_session)
    bob = create_and_login(client, db_session)

    r = client.post("/api/deposits", json={"wonDecimal": "500"}, headers=auth_header(alice["access"]))
    deposit_id = r.json()["id"]

    r = client.get(f"/api/deposits/{deposit_id}", headers=auth_header(bob["access"]))
    assert r.status_code == 403, r.text

    r = client.post(
        "/api/deposits",
        json={"userId": alice["user_id"], "wonDecimal": "500"},
        headers=auth_header(bob["access"]),
    )
    assert r.status_code == 403, r.text


def test_admin_creates_deposit_for_user(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)

    r = client.post(
        "/api/deposits",
        json={"userId": user["user_id"], "wonDecimal": "500"},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 201, r.text
    assert r.json()["userId"] == user["user_id"]


def test_negative_deposit_amount_is_422(client, db_session):
    user = create_and_login(client, db_session)

    r = client.post("/api/deposits", json={"wonDecimal": "-1"}, headers=auth_header(user["access"]))
    assert r.status_code == 422, r.text
    assert r.json()["errors"] == [{"field": "wonDecimal", "message": "wonDecimal must not be negative"}]


def test_withdrawal_lifecycle(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))

    r = client.post("/api/withdrawals", json=WITHDRAWAL, headers=auth_header(translator["access"]))
    assert r.status_code == 201, r.text
    withdrawal = r.json()
    assert withdrawal["status"] == "PENDING"
    assert withdrawal["nameOfBank"] == "Shinhan"

    r = client.put(
        f"/api/withdrawals/{withdrawal['id']}",
        json={"status": "REJECTED"},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "REJECTED"

    r = client.get("/api/withdrawals", headers=auth_header(translator["access"]))
    assert r.json()["total"] == 1


def test_withdrawal_requires_bank_fields(client, db_session):
    user = create_and_login(client, db_session)

    r = client.post("/api/withdrawals", json={"sumDecimal": "10"}, headers=auth_header(user["access"]))
    assert r.status_code == 422, r.text

    r = client.post(
        "/api/withdrawals",
        json={**WITHDRAWAL, "sumDecimal": "-5"},
        headers=auth_header(user["access"]),
    )
    assert r.status_code == 422, r.text
