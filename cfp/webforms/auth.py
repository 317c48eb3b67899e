import logging

import bcrypt
from flask import Blueprint, flash, redirect, render_template, request, session, url_for

from cfp.models import User, db

bp = Blueprint('auth', __name__)
logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def check_bcrypt_hash(stored_hash, input_password):
    return bcrypt.checkpw(input_password.encode(), stored_hash.encode())


def current_user():
    """The logged in User, or None."""
    user_id = session.get('user_id')
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def _safe_next(target):
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return url_for('sessions.index')


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'POST':
        email    = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        user = db.session.execute(db.select(User).filter_by(email=email)).scalar_one_or_none()

        if not user:
            flash("No user found.")
        elif not check_bcrypt_hash(user.password, password):
            flash("Invalid password.")
        else:
            session.clear()
            session['user_id'] = user.id
            logger.info(f"User {user.email} logged in")
            return redirect(_safe_next(request.args.get('next')))

    return render_template('auth/login.html')


@bp.route('/logout')
def logout():
    session.clear()
    return redirect(url_for('auth.login'))
