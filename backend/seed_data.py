"""Seed database with a demo user awaiting activation."""
import logging
import uuid

from tabnews.database import SessionLocal
from tabnews.models import User
from tabnews.use_cases.activation import send_activation_email_to_user

logger = logging.getLogger(__name__)

DEMO_USER_ID = uuid.UUID('00000000-0000-0000-0000-000000000101')


def seed():
    """Create the demo user (if missing) and send it an activation email."""
    db = SessionLocal()

    try:
        user = db.query(User).filter(User.id == DEMO_USER_ID).first()
        if not user:
            user = User(
                id=DEMO_USER_ID,
                username='ana',
                email='ana@localhost',
                features=['read:activation_token'],
            )
            db.add(user)
            db.commit()
            print(f"Created user {user.username}")

        token = send_activation_email_to_user(db=db, user=user)
        print(f"Activation token {token.id} sent to {user.email}")

    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    seed()
