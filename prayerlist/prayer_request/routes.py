"""Routes for the prayer request blueprint."""

from firebase_admin import firestore
from flask import g

from prayerlist.auth.decorators import login_required
from prayerlist.errors import NotFoundError, PermissionDeniedError
from prayerlist.group.services import GroupService, roles
from prayerlist.utils import api_response

from . import bp
from .commitments import CommitmentLedger
from .forms import PrayerRequestForm
from .services import PrayerRequestService


@bp.route("/create", methods=["POST"])
@login_required
def create_prayer_request():
    """Post a prayer request, publicly or to a group the caller belongs to."""
    form = PrayerRequestForm().validate_or_raise()
    db = firestore.client()
    user_id = g.user["id"]

    group_id = str(form.groupId.data or "").strip() or None
    if group_id is not None:
        GroupService.get_group_or_404(db, group_id)
        if not roles.is_member(db, group_id, user_id):
            raise PermissionDeniedError(
                "You must be a member of this group to post a prayer request"
            )

    is_group_only = (
        bool(form.isGroupOnly.data) if form.was_provided("isGroupOnly") else None
    )
    prayer_request = PrayerRequestService.create_prayer_request(
        db,
        text=form.text.data,
        user_id=user_id,
        is_anonymous=bool(form.isAnonymous.data),
        group_id=group_id,
        is_group_only=is_group_only,
    )
    prayer_request = PrayerRequestService.present(db, [prayer_request])[0]
    return api_response("Prayer request created successfully", prayer_request, 201)


@bp.route("/get-all", methods=["GET"])
def get_all_prayer_requests():
    """List public prayer requests, newest first."""
    db = firestore.client()
    prayer_requests = PrayerRequestService.present(
        db, PrayerRequestService.get_public_prayer_requests(db)
    )
    return api_response("Prayer requests retrieved successfully", prayer_requests)


@bp.route("/get/<string:request_id>", methods=["GET"])
def get_prayer_request(request_id):
    """Fetch a single prayer request."""
    db = firestore.client()
    prayer_request = PrayerRequestService.get_prayer_request(db, request_id)
    if prayer_request is None:
        raise NotFoundError("Prayer request not found")
    prayer_request = PrayerRequestService.present(db, [prayer_request])[0]
    return api_response("Prayer request retrieved successfully", prayer_request)


@bp.route("/delete/<string:request_id>", methods=["DELETE"])
@login_required
def delete_prayer_request(request_id):
    """Delete one of the caller's own prayer requests."""
    deleted = PrayerRequestService.delete_prayer_request(
        firestore.client(), request_id, g.user["id"]
    )
    if not deleted:
        raise NotFoundError(
            "Prayer request not found or you do not have permission to delete it"
        )
    return api_response("Prayer request deleted successfully")


@bp.route("/toggle-commit/<string:request_id>", methods=["POST"])
@login_required
def toggle_commit(request_id):
    """Commit to pray for a request, or withdraw an existing commitment."""
    result = CommitmentLedger.toggle(firestore.client(), request_id, g.user["id"])
    message = (
        "Prayer commitment added"
        if result["committed"]
        else "Prayer commitment removed"
    )
    return api_response(message, result)


@bp.route("/check-commit/<string:request_id>", methods=["GET"])
@login_required
def check_commit(request_id):
    """Report whether the caller has committed to a request."""
    has_committed = CommitmentLedger.has_committed(
        firestore.client(), request_id, g.user["id"]
    )
    return api_response(
        "Prayer commitment status retrieved", {"hasCommitted": has_committed}
    )


@bp.route("/my-prayer-list", methods=["GET"])
@login_required
def my_prayer_list():
    """List the requests the caller has committed to pray for."""
    prayer_requests = CommitmentLedger.get_prayer_list(
        firestore.client(), g.user["id"]
    )
    return api_response("User prayer list retrieved successfully", prayer_requests)
