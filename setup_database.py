"""
setup_database.py — Create tables and check the config. Run once after first deploy.

Usage: python setup_database.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import Database
from app.models import User, Couple


def setup():
    db = Database(settings.database_url)
    if not settings.database_url:
        print(f"⚠ DATABASE_URL not set, using {db.url}")

    try:
        db.ping()
        db.create_all()
    except SQLAlchemyError as e:
        print(f"✗ Could not reach the database: {e}")
        sys.exit(1)

    print(f"✓ Connected to {db.engine.url.render_as_string(hide_password=True)}")
    print("✓ Tables created/verified")

    session = db.session()
    try:
        users = session.query(User).count()
        couples = session.query(Couple).count()
        print(f"  {users} user(s), {couples} couple(s)")
    finally:
        session.close()
        db.dispose()

    if settings.emails_configured:
        print(f"✓ Allowlist: {settings.partner1_email}, {settings.partner2_email}")
    else:
        print("⚠ PARTNER1_EMAIL / PARTNER2_EMAIL not set; nobody can sign in")

    if settings.google_configured:
        print("✓ Google OAuth client configured")
    else:
        print("⚠ GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET not set")

    print(f"\nStart the server:")
    print(f"  uvicorn app.main:app --reload --port 8000")


if __name__ == "__main__":
    setup()
