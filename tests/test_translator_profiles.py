"""
통역사 프로필 API 테스트

- 생성 규칙 (ROLE_TRANSLATOR 필수, 사용자당 1개)
- 필터 검색 / 주제별 통화 가능 목록
- 평점 / 통화 통계, 상태 변경, 삭제

"""

from sqlalchemy import select

from app.models import TranslatorProfile
from tests.helpers import auth_header, create_and_login


def _catalog(client, admin_headers):
    english = client.post("/api/languages", json={"name": "English"}, headers=admin_headers)
    assert english.status_code == 201, english.text
    medical = client.post("/api/themes", json={"name": "Medical", "description": "Hospital"}, headers=admin_headers)
    assert medical.status_code == 201, medical.text
    return english.json()["id"], medical.json()["id"]


def _new_translator_without_profile(client, db_session, admin_headers, **kwargs):
    """USER 로 만든 뒤 ADMIN 이 TRANSLATOR 로 변경 (프로필 자동 생성 없음)."""
    user = create_and_login(client, db_session, **kwargs)
    r = client.put(f"/api/users/{user['user_id']}", json={"roles": ["TRANSLATOR"]}, headers=admin_headers)
    assert r.status_code == 200, r.text
    return user


def _profile_id_for(db_session, user_id):
    db_session.expire_all()
    return db_session.scalar(select(TranslatorProfile.id).where(TranslatorProfile.user_id == user_id))


def test_create_profile_with_languages_and_themes(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    admin_headers = auth_header(admin["access"])
    language_id, theme_id = _catalog(client, admin_headers)
    user = _new_translator_without_profile(client, db_session, admin_headers, first_name="Jisoo", last_name="Park")

    r = client.post(
        "/api/translator-profiles",
        json={
            "userId": user["user_id"],
            "email": "jisoo@example.com",
            "dateOfBirth": "1990-05-01",
            "levelOfKorean": "NATIVE",
            "isAvailable": True,
            "languageIds": [language_id],
            "themeIds": [theme_id],
        },
        headers=admin_headers,
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["userId"] == user["user_id"]
    assert body["firstName"] == "Jisoo"
    assert body["languages"] == [{"id": language_id, "name": "English"}]
    assert [t["name"] for t in body["themes"]] == ["Medical"]
    assert body["averageRating"] is None
    assert body["totalRatings"] == 0
    assert body["totalCalls"] == 0


def test_create_profile_for_non_translator_is_invalid_role(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)

    r = client.post(
        "/api/translator-profiles",
        json={"userId": user["user_id"], "email": "u@example.com"},
        headers=auth_header(admin["access"]),
    )
    assert r.status_code == 403, r.text
    assert "ROLE_TRANSLATOR" in r.json()["message"]


def test_create_second_profile_is_conflict(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))

    r = client.post(
        "/api/translator-profiles",
        json={"userId": translator["user_id"], "email": "t@example.com"},
        headers=auth_header(translator["access"]),
    )
    assert r.status_code == 409, r.text
    assert str(translator["user_id"]) in r.json()["message"]


def test_translator_cannot_create_profile_for_someone_else(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    other = create_and_login(client, db_session, roles=("TRANSLATOR",))

    r = client.post(
        "/api/translator-profiles",
        json={"userId": other["user_id"], "email": "x@example.com"},
        headers=auth_header(translator["access"]),
    )
    assert r.status_code == 403, r.text


def test_create_profile_with_unknown_language_is_404(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    admin_headers = auth_header(admin["access"])
    user = _new_translator_without_profile(client, db_session, admin_headers)

    r = client.post(
        "/api/translator-profiles",
        json={"userId": user["user_id"], "email": "l@example.com", "languageIds": [4242]},
        headers=admin_headers,
    )
    assert r.status_code == 404, r.text
    assert "4242" in r.json()["message"]


def test_create_profile_with_future_birth_date_is_422(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    admin_headers = auth_header(admin["access"])
    user = _new_translator_without_profile(client, db_session, admin_headers)

    r = client.post(
        "/api/translator-profiles",
        json={"userId": user["user_id"], "email": "f@example.com", "dateOfBirth": "2999-01-01"},
        headers=admin_headers,
    )
    assert r.status_code == 422, r.text
    assert r.json()["errors"][0]["field"] == "dateOfBirth"


def test_search_filters_and_available_by_theme(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    admin_headers = auth_header(admin["access"])
    language_id, theme_id = _catalog(client, admin_headers)

    ready = create_and_login(client, db_session, roles=("TRANSLATOR",), first_name="Ready")
    idle = create_and_login(client, db_session, roles=("TRANSLATOR",), first_name="Idle")
    ready_profile = _profile_id_for(db_session, ready["user_id"])

    r = client.put(
        f"/api/translator-profiles/{ready_profile}",
        json={"languageIds": [language_id], "themeIds": [theme_id], "isAvailable": True, "isOnline": True},
        headers=auth_header(ready["access"]),
    )
    assert r.status_code == 200, r.text

    r = client.get("/api/translator-profiles", headers=admin_headers)
    assert r.status_code == 200, r.text
    assert r.json()["total"] == 2

    r = client.get(f"/api/translator-profiles?languageId={language_id}&isAvailable=true", headers=admin_headers)
    assert r.status_code == 200, r.text
    items = r.json()["items"]
    assert [i["id"] for i in items] == [ready_profile]
    assert items[0]["languageNames"] == ["English"]
    assert items[0]["themeNames"] == ["Medical"]

    r = client.get("/api/translator-profiles?search=idl", headers=auth_header(idle["access"]))
    assert r.status_code == 200, r.text
    assert [i["userId"] for i in r.json()["items"]] == [idle["user_id"]]

    r = client.get(f"/api/translator-profiles/available/theme/{theme_id}", headers=admin_headers)
    assert r.status_code == 200, r.text
    assert [i["id"] for i in r.json()] == [ready_profile]
    assert r.json()[0]["fullName"] == "Ready User"

    r = client.get("/api/translator-profiles/available/theme/999999", headers=admin_headers)
    assert r.status_code == 404, r.text


def test_profile_stats_include_ratings_and_calls(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    alice = create_and_login(client, db_session)
    bob = create_and_login(client, db_session)
    profile_id = _profile_id_for(db_session, translator["user_id"])

    for session, score in ((alice, 4), (bob, 5)):
        r = client.post(
            "/api/ratings",
            json={"translatorProfileId": profile_id, "score": score},
            headers=auth_header(session["access"]),
        )
        assert r.status_code == 201, r.text

    r = client.post("/api/calls", json={"recipientId": translator["user_id"]}, headers=auth_header(alice["access"]))
    assert r.status_code == 201, r.text

    r = client.get(f"/api/translator-profiles/{profile_id}", headers=auth_header(bob["access"]))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["averageRating"] == 4.5
    assert body["totalRatings"] == 2
    assert body["totalCalls"] == 1

    r = client.get("/api/translator-profiles", headers=auth_header(bob["access"]))
    summary = r.json()["items"][0]
    assert summary["inCall"] is True
    assert summary["totalCalls"] == 1


def test_owner_toggles_availability_and_online_status(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    stranger = create_and_login(client, db_session)
    profile_id = _profile_id_for(db_session, translator["user_id"])

    r = client.patch(
        f"/api/translator-profiles/{profile_id}/availability?isAvailable=true",
        headers=auth_header(translator["access"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["isAvailable"] is True

    r = client.patch(
        f"/api/translator-profiles/{profile_id}/online-status?isOnline=true",
        headers=auth_header(translator["access"]),
    )
    assert r.status_code == 200, r.text
    assert r.json()["isOnline"] is True

    r = client.patch(
        f"/api/translator-profiles/{profile_id}/online-status?isOnline=false",
        headers=auth_header(stranger["access"]),
    )
    assert r.status_code == 403, r.text


def test_owner_deletes_profile(client, db_session):
    translator = create_and_login(client, db_session, roles=("TRANSLATOR",))
    profile_id = _profile_id_for(db_session, translator["user_id"])
    headers = auth_header(translator["access"])

    r = client.delete(f"/api/translator-profiles/{profile_id}", headers=headers)
    assert r.status_code == 204, r.text

    r = client.get(f"/api/translator-profiles/{profile_id}", headers=headers)
    assert r.status_code == 404, r.text


def test_catalog_write_is_admin_only_and_unique(client, db_session):
    admin = create_and_login(client, db_session, roles=("ADMIN",))
    user = create_and_login(client, db_session)

    r = client.post("/api/languages", json={"name": "Korean"}, headers=auth_header(user["access"]))
    assert r.status_code == 403, r.text

    r = client.post("/api/languages", json={"name": "Korean"}, headers=auth_header(admin["access"]))
    assert r.status_code == 201, r.text
    r = client.post("/api/languages", json={"name": "korean"}, headers=auth_header(admin["access"]))
    assert r.status_code == 409, r.text

    r = client.get("/api/languages", headers=auth_header(user["access"]))
    assert r.status_code == 200, r.text
    assert [i["name"] for i in r.json()["items"]] == ["Korean"]
