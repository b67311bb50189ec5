from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import engine, Session, init_db

from app.db.seed import seed_all


def run_seed():
    configure_logging(settings.LOG_LEVEL)
    init_db()
    with Session(engine) as session:
        seed_all(session=session, seed_path="app/db/seed_data.yaml")


if __name__ == "__main__":
    run_seed()
