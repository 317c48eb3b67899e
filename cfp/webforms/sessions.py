import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from cfp.models import SESSION_ATTRIBUTES, Session, db
from cfp.notifications.notifications import notify_presenters
from cfp.webforms.extensions import limiter
from cfp.webforms.forms import SessionForm
from cfp.webforms.guard import guard_resource

bp = Blueprint('sessions', __name__, url_prefix='/sessions')
logger = logging.getLogger(__name__)

# submitting a session is open to anonymous visitors
guard_resource(bp, 'presenter', 'maintainer', exempt=('new', 'create'))


def session_params():
    return {name: request.form[name] for name in SESSION_ATTRIBUTES if name in request.form}


def _submission_limit():
    return current_app.config['SUBMISSION_RATE_LIMIT']


@bp.route('/', methods=['GET'])
def index():
    sessions = db.session.execute(db.select(Session).order_by(Session.id)).scalars().all()
    return render_template('sessions/index.html', sessions=sessions)


@bp.route('/new', methods=['GET'])
def new():
    session = Session()
    return render_template('sessions/new.html', session=session, form=SessionForm(obj=session))


@bp.route('/', methods=['POST'])
@limiter.limit(_submission_limit)
def create():
    form = SessionForm()
    session = Session()
    session.assign_attributes(session_params())

    if form.validate_on_submit():
        session.build_presenters()
        if session.save():
            logger.info(f"Session {session.id} submitted with {len(session.presenters)} presenter(s)")
            notify_presenters(session)
            flash("Session was successfully submitted.")
            return redirect(url_for('sessions.show', session_id=session.id))

    return render_template('sessions/new.html', session=session, form=form)


@bp.route('/<int:session_id>', methods=['GET'])
def show(session_id):
    session = db.get_or_404(Session, session_id)
    return render_template('sessions/show.html', session=session)


@bp.route('/<int:session_id>/edit', methods=['GET'])
def edit(session_id):
    session = db.get_or_404(Session, session_id)
    return render_template('sessions/edit.html', session=session, form=SessionForm(obj=session))


@bp.route('/<int:session_id>', methods=['POST', 'PUT', 'PATCH'])
def update(session_id):
    session = db.get_or_404(Session, session_id)
    form = SessionForm(obj=session)

    if (form.is_submitted() and form.validate_submitted(request.form)
            and session.update_attributes(session_params())):
        flash("Session was successfully updated.")
        return redirect(url_for('sessions.show', session_id=session.id))

    return render_template('sessions/edit.html', session=session, form=form)


@bp.route('/<int:session_id>/delete', methods=['POST'])
@bp.route('/<int:session_id>', methods=['DELETE'])
def destroy(session_id):
    session = db.get_or_404(Session, session_id)
    db.session.delete(session)
    db.session.commit()
    logger.info(f"Session {session_id} deleted")
    return redirect(url_for('sessions.index'))
