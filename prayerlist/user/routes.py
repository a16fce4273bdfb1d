"""Routes for the user blueprint."""

from firebase_admin import firestore
from flask import current_app, g

from prayerlist.auth.decorators import login_required
from prayerlist.errors import DuplicateResourceError, NotFoundError
from prayerlist.utils import api_response

from . import bp
from .forms import UserProfileForm
from .services import UserService


@bp.route("/get", methods=["GET"])
@login_required(user_required=False)
def get_user():
    """Return the caller's user record."""
    if g.user is None:
        raise NotFoundError("User not found")
    return api_response("User retrieved successfully", g.user)


@bp.route("/create", methods=["POST"])
@login_required(user_required=False)
def create_user():
    """Provision the caller's user record on first sign-in."""
    form = UserProfileForm().validate_or_raise()
    user, created = UserService.get_or_create_user(
        firestore.client(),
        g.external_id,
        first_name=form.firstName.data,
        last_name=form.lastName.data,
    )
    if not created:
        raise DuplicateResourceError("User already exists", data=user)

    current_app.logger.info(f"Created user {g.external_id}")
    return api_response("User created successfully", user, 201)


@bp.route("/update", methods=["PUT"])
@login_required(user_required=False)
def update_user():
    """Update the caller's name fields."""
    form = UserProfileForm().validate_or_raise()
    update_data = {
        field: getattr(form, field).data
        for field in ("firstName", "lastName")
        if form.was_provided(field)
    }
    user = UserService.update_user(firestore.client(), g.external_id, update_data)
    if user is None:
        raise NotFoundError("User not found")
    return api_response("User updated successfully", user)
