import logging

from cfp.errors import NotificationDeliveryError
from cfp.producer import postman

logger = logging.getLogger(__name__)


def notify_submission(presenter, session):
    postman.deliver("session_submit", presenter, session)


def notify_presenters(session):
    """Send one submission notification per presenter of a freshly created session.

    Must only be called after the session was committed. A failed delivery
    is logged and does not stop the remaining presenters.

    Returns the number of notifications that were handed to the mail queue.
    """
    delivered = 0
    for presenter in session.presenters:
        try:
            notify_submission(presenter, session)
            delivered += 1
        except NotificationDeliveryError as e:
            logger.error(f"Notification for session {session.id} to {presenter.email} failed: {e}")
    return delivered
