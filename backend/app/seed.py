# backend/app/seed.py
# Usage: python -m app.seed   (wipes and reloads the demo data set)

import logging

from app.core.database import Base, SessionLocal, engine
from app.core.seed import seed_database
from app.models import activity, notification, revenue, user  # noqa: F401


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # make sure tables exist
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
