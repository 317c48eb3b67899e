from sqlalchemy.exc import SQLAlchemyError

from cfp.models import Session, User, db


def test_assign_attributes_blanks_become_none():
    session = Session()
    session.assign_attributes({'title': ' Talk ', 'second_presenter_email': '', 'unknown': 'x'})

    assert session.title == 'Talk'
    assert session.second_presenter_email is None
    assert not hasattr(session, 'unknown')


def test_presenter_emails_in_field_order():
    session = Session(first_presenter_email=None, second_presenter_email='b@example.com')
    assert session.presenter_emails() == ['b@example.com']


def test_build_presenters_keeps_slot_positions():
    session = Session(first_presenter_email=None, second_presenter_email='b@example.com')
    presenters = session.build_presenters()
    assert [(p.email, p.position) for p in presenters] == [('b@example.com', 2)]


def test_save_without_title_fails(app, session_count):
    assert Session(description="No title").save() is False
    assert session_count() == 0


def test_save_persists(app, session_count):
    session = Session(title="Talk")
    assert session.save() is True
    assert session.id is not None
    assert session_count() == 1


def test_save_recovers_from_storage_errors(app, mocker, session_count):
    mocker.patch.object(db.session, 'commit', side_effect=SQLAlchemyError("disk full"))
    rollback = mocker.patch.object(db.session, 'rollback')

    assert Session(title="Talk").save() is False
    rollback.assert_called_once()


def test_update_attributes_keeps_identity(app, session_factory, session_count):
    session = session_factory()
    session_id = session.id

    assert session.update_attributes({'title': 'Renamed'}) is True
    assert session.id == session_id
    assert session_count() == 1


def test_user_roles():
    user = User(email='m@example.com', password='x', roles='presenter, maintainer')
    assert user.role_names == ['presenter', 'maintainer']
    assert user.has_role('maintainer')
    assert not User(email='a@example.com', password='x', roles='').has_role('presenter')
