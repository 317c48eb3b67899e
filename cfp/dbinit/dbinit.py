import logging
import os

from cfp.models import User, db
from cfp.webforms.auth import hash_password
from cfp.webforms.webforms import create_app

logging.basicConfig(level=logging.INFO)


def seed_maintainer(email, password):
    """Create the first maintainer account. Existing accounts are left untouched."""
    if not email or not password:
        logging.info("ADMIN_EMAIL or ADMIN_PASSWORD not set, no maintainer seeded")
        return None

    user = db.session.execute(db.select(User).filter_by(email=email)).scalar_one_or_none()
    if user:
        logging.info(f"User {email} already exists, skipping creation")
        return user

    user = User(email=email, password=hash_password(password), roles='maintainer')
    db.session.add(user)
    db.session.commit()
    logging.info(f"Maintainer created: {email}")
    return user


def main(app=None):
    app = app or create_app()
    with app.app_context():
        db.create_all()
        logging.info("Tables 'sessions', 'presenters' and 'users' created or already present")
        seed_maintainer(os.getenv('ADMIN_EMAIL'), os.getenv('ADMIN_PASSWORD'))


if __name__ == "__main__":
    main()
