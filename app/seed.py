import logging

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import build_engine, build_session_factory
from app.services.auth_service import create_user
from app.services.sdg_service import SdgService

log = logging.getLogger("climate_finance.seed")


def seed():
    settings = get_settings()
    configure_logging(settings)

    SessionLocal = build_session_factory(build_engine(settings))
    db: Session = SessionLocal()

    try:
        added = SdgService().seed(db)
        log.info("sdg seed complete", extra={"added": added})

        if settings.admin_email and settings.admin_password:
            user = create_user(db, settings.admin_email, settings.admin_password)
            log.info("admin account ready", extra={"email": user.email})
        else:
            log.warning("ADMIN_EMAIL / ADMIN_PASSWORD not set; no admin account created")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
