"""
Database initialization and bootstrap accounts.

Run directly to create the tables and seed the accounts:

    python -m chatapp.db.init_db
"""
import logging
from sqlalchemy.orm import Session
from chatapp.core.config import settings
from chatapp.core.security import get_password_hash
from chatapp.models.user import UserRole
from chatapp.repositories.user_repository import UserRepository
from chatapp.db.session import SessionLocal, init_db

logger = logging.getLogger(__name__)


def bootstrap(db: Session) -> None:
    """
    Make sure the anonymous user and the initial admin exist. Idempotent.

    The anonymous user has no password and cannot log in. The admin is only
    created when ADMIN_PASSWORD is configured.
    """
    user_repo = UserRepository(db)

    if not user_repo.exists_by_username(settings.ANONYMOUS_USERNAME):
        user_repo.create(settings.ANONYMOUS_USERNAME, hashed_password=None, role=UserRole.USER)
        db.commit()
        logger.info(f"Anonymous user '{settings.ANONYMOUS_USERNAME}' created")

    if user_repo.exists_by_username(settings.ADMIN_USERNAME):
        return

    if not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_PASSWORD is not set, skipping creation of the initial admin user")
        return

    user_repo.create(
        settings.ADMIN_USERNAME,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN
    )
    db.commit()
    logger.info(f"Initial admin user '{settings.ADMIN_USERNAME}' created")


if __name__ == "__main__":
    from chatapp.core.logging_config import setup_logging

    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("Initializing database...")
    init_db()
    db = SessionLocal()
    try:
        bootstrap(db)
    finally:
        db.close()
    logger.info("Database initialized successfully!")
