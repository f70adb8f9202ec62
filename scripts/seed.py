"""

초기 데이터 시딩 스크립트.

- 역할(ROLE_TRANSLATOR / ROLE_USER / ROLE_ADMIN)을 생성하고
- .env 의 SEED_ADMIN_USERNAME / SEED_ADMIN_PASSWORD 로 테스트용 ADMIN 계정을 만든다.
- 이미 존재하는 역할 / 계정은 건너뛴다 (여러 번 실행해도 안전).

서버 기동 시 SEED_ON_STARTUP=False 로 자동 시딩을 끈 환경(운영 등)에서
마이그레이션 직후 한 번 실행하는 용도.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ alembic upgrade head
- (.venv) ~\backend~$ python -m scripts.seed

"""

from dotenv import load_dotenv
load_dotenv()

from app.core.config import settings
from app.db.session import SessionLocal
from app.services.seed import seed_admin, seed_roles



def main():
    db = SessionLocal()
    try:
        created = seed_roles(db)
        if created:
            print(f"✅ Roles created: {', '.join(r.name.value for r in created)}")
        else:
            print("✅ Roles already exist. Skip creation.")

        admin = seed_admin(db)
        if admin:
            print(f"🚀 ADMIN created: {admin.username}")
        else:
            print(f"✅ ADMIN {settings.SEED_ADMIN_USERNAME} already exists. Skip creation.")

    finally:
        db.close()


if __name__ == "__main__":
    main()
