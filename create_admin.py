from sqlalchemy import text

from app.core.config import get_settings
from app.core.security import hash_password
from app.db.session import create_db_engine


def main():
    settings = get_settings()
    engine = create_db_engine(settings.database_url)

    email = input("Admin email: ").strip().lower()
    username = input("Admin username: ").strip().lower()
    full_name = input("Full name: ").strip() or username
    password = input("Admin password: ").strip()

    pw_hash = hash_password(password)

    with engine.begin() as conn:
        # never duplicate an existing account
        exists = conn.execute(
            text(
                "SELECT 1 FROM users "
                "WHERE (lower(user_email) = :e OR lower(username) = :u) AND user_is_deleted = :deleted "
                "LIMIT 1"
            ),
            {"e": email, "u": username, "deleted": False},
        ).fetchone()

        if exists:
            print("That email or username already exists. Use reset_password.py to change the password.")
            return

        role = conn.execute(
            text("SELECT role_id FROM roles WHERE role_name = :n LIMIT 1"),
            {"n": "Administrator"},
        ).fetchone()

        conn.execute(
            text("""
                INSERT INTO users (username, user_email, user_password, user_full_name, user_role_role_id, user_is_deleted)
                VALUES (:u, :e, :h, :f, :r, :deleted)
            """),
            {"u": username, "e": email, "h": pw_hash, "f": full_name, "r": role[0] if role else None, "deleted": False},
        )

    print("OK: admin created:", email)


if __name__ == "__main__":
    main()
