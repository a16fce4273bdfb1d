"""Decorators that resolve the caller's identity from a bearer token."""

from functools import wraps

from firebase_admin import auth, firestore
from flask import current_app, g, request

from prayerlist.core.constants import USERS_COLLECTION
from prayerlist.errors import AuthenticationError
from prayerlist.utils import snapshot_to_dict

# Errors raised by the identity provider for tokens it will not vouch for
TOKEN_ERRORS = (
    auth.InvalidIdTokenError,
    auth.CertificateFetchError,
    auth.UserDisabledError,
    ValueError,
)


def _bearer_token():
    """Return the token from the Authorization header, or None."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[len("Bearer ") :].strip() or None


def _resolve_identity():
    """Verify the bearer token and load the matching local user.

    Returns the verified external id, or None when the request carries no
    usable token. Sets g.external_id and g.user as a side effect.
    """
    g.external_id = None
    g.user = None

    token = _bearer_token()
    if token is None:
        return None

    try:
        decoded_token = auth.verify_id_token(token)
    except TOKEN_ERRORS as e:
        current_app.logger.error(f"Authentication error: {e}")
        return None

    external_id = decoded_token["uid"]
    g.external_id = external_id
    user_doc = firestore.client().collection(USERS_COLLECTION).document(external_id)
    g.user = snapshot_to_dict(user_doc.get())
    return external_id


def login_required(f=None, user_required=True):
    """Reject the request with 401 unless it carries a verified identity.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(user_required=False)
    def first_sign_in_view():
        ...

    With user_required (the default) the caller must also have a local
    user record. First-time users reach only views that opt out.
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if _bearer_token() is None:
                raise AuthenticationError("Missing or invalid authorization header")
            if _resolve_identity() is None:
                raise AuthenticationError("Invalid or expired session token")
            if user_required and g.user is None:
                raise AuthenticationError("Unauthorized - user not found")
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def optional_auth(f):
    """Resolve the caller if possible, without ever rejecting the request."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        _resolve_identity()
        return f(*args, **kwargs)

    return decorated_function
