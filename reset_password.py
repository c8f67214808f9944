from sqlalchemy import text

from app.core.config import get_settings
from app.core.security import hash_password
from app.db.session import create_db_engine


def main():
    settings = get_settings()
    engine = create_db_engine(settings.database_url)

    login = input("Username or email to reset: ").strip().lower()
    new_pw = input("New password: ").strip()

    with engine.begin() as conn:
        rows = conn.execute(
            text(
                "SELECT user_id, user_is_deleted FROM users "
                "WHERE lower(user_email) = :k OR lower(username) = :k "
                "ORDER BY user_id"
            ),
            {"k": login},
        ).all()

        if not rows:
            print("No user with that username or email.")
            return

        # a live account wins; otherwise only a single deleted one may be restored
        live = [r for r in rows if not r.user_is_deleted]
        candidates = live or rows
        if len(candidates) > 1:
            print("Refusing: several accounts match", login, [r.user_id for r in candidates])
            return

        user_id = candidates[0].user_id
        conn.execute(
            text("UPDATE users SET user_password = :h, user_is_deleted = :deleted WHERE user_id = :id"),
            {"h": hash_password(new_pw), "deleted": False, "id": user_id},
        )
        print("OK: password updated for", login, "(user_id", user_id, ")")


if __name__ == "__main__":
    main()
