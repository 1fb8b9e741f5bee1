"""Create the portal tables (users, electives, selections, limits).

Usage:
    python init_db.py [--with-admin]
"""
import sys

from app import app
from extensions import db
import models  # noqa: F401  (registers every table on db.metadata)

with app.app_context():
    print("DB URI:", app.config["SQLALCHEMY_DATABASE_URI"])
    db.create_all()
    print("Tables:", ", ".join(sorted(db.metadata.tables)))

    if "--with-admin" in sys.argv[1:]:
        from seed_demo import ensure_admin

        ensure_admin()
        db.session.commit()
