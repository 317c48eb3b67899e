from functools import wraps

from flask import abort, redirect, request, url_for

from cfp.webforms.auth import current_user


def _deny(roles):
    """Return the response blocking the current request, or None when it may pass."""
    user = current_user()
    if user is None:
        return redirect(url_for('auth.login', next=request.path))
    if not user.has_role(*roles):
        abort(403)
    return None


def guard_resource(blueprint, *roles, exempt=()):
    """Require one of ``roles`` for every view of ``blueprint`` except the ``exempt`` ones.

    Anonymous visitors are sent to the login form, logged in users without
    one of the roles get a 403. The check runs before the view body.
    """
    exempt_endpoints = {f"{blueprint.name}.{action}" for action in exempt}

    @blueprint.before_request
    def guard():
        if request.endpoint in exempt_endpoints:
            return None
        return _deny(roles)

    return guard


def role_required(*roles):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            denied = _deny(roles)
            if denied is not None:
                return denied
            return f(*args, **kwargs)
        return decorated_function
    return decorator
