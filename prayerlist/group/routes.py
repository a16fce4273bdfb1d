"""Routes for the group blueprint."""

from firebase_admin import firestore
from flask import g, request

from prayerlist.auth.decorators import login_required, optional_auth
from prayerlist.errors import NotFoundError, PermissionDeniedError, ValidationError
from prayerlist.prayer_request.services import PrayerRequestService
from prayerlist.utils import api_response

from . import bp
from .forms import (
    DisplayNameForm,
    GroupForm,
    GroupMessageForm,
    JoinGroupForm,
    MemberActionForm,
)
from .services import GroupMessageService, GroupService, roles


@bp.route("/create", methods=["POST"])
@login_required
def create_group():
    """Create a new group owned by the caller."""
    form = GroupForm().validate_or_raise()
    db = firestore.client()
    group = GroupService.create_group(
        db,
        name=form.name.data.strip(),
        description=form.description.data.strip(),
        is_public=bool(form.isPublic.data),
        owner_id=g.user["id"],
    )
    group = GroupService.enrich_groups(db, [group])[0]
    return api_response("Group created successfully", group, 201)


@bp.route("/search", methods=["GET"])
def search_groups():
    """Search groups by name."""
    term = request.args.get("q")
    if term is None:
        raise ValidationError("Query parameter 'q' is required")
    groups = GroupService.search_groups(firestore.client(), term)
    return api_response("Groups retrieved successfully", groups)


@bp.route("/public", methods=["GET"])
def get_public_groups():
    """List all public groups."""
    groups = GroupService.get_public_groups(firestore.client())
    return api_response("Public groups retrieved successfully", groups)


@bp.route("/my-groups", methods=["GET"])
@login_required
def get_my_groups():
    """List the groups the caller belongs to."""
    groups = GroupService.get_user_groups(firestore.client(), g.user["id"])
    return api_response("User groups retrieved successfully", groups)


@bp.route("/get/<string:group_id>", methods=["GET"])
@optional_auth
def get_group(group_id):
    """Fetch a single group, noting the caller's role when signed in."""
    db = firestore.client()
    group = GroupService.get_group_or_404(db, group_id)
    group = GroupService.enrich_groups(db, [group])[0]
    group.pop("code", None)
    user_id = g.user["id"] if g.user else None
    group = GroupService.with_viewer_role(db, group, user_id)
    return api_response("Group retrieved successfully", group)


@bp.route("/feed/<string:group_id>", methods=["GET"])
@login_required
def get_group_feed(group_id):
    """List a group's prayer requests (members only)."""
    db = firestore.client()
    GroupService.get_group_or_404(db, group_id)
    if not roles.is_member(db, group_id, g.user["id"]):
        raise PermissionDeniedError(
            "You must be a member of this group to view its feed"
        )
    prayer_requests = PrayerRequestService.present(
        db, PrayerRequestService.get_group_prayer_requests(db, group_id)
    )
    return api_response("Group feed retrieved successfully", prayer_requests)


@bp.route("/join/<string:group_id>", methods=["POST"])
@login_required
def join_group(group_id):
    """Join a group, supplying the join code for private groups."""
    form = JoinGroupForm().validate_or_raise()
    GroupService.join_group(firestore.client(), group_id, g.user["id"], form.code.data)
    return api_response("Successfully joined group")


@bp.route("/leave/<string:group_id>", methods=["POST"])
@login_required
def leave_group(group_id):
    """Leave a group."""
    GroupService.leave_group(firestore.client(), group_id, g.user["id"])
    return api_response("Successfully left group")


@bp.route("/delete/<string:group_id>", methods=["DELETE"])
@login_required
def delete_group(group_id):
    """Delete a group (owner only)."""
    GroupService.delete_group(firestore.client(), group_id, g.user["id"])
    return api_response("Group deleted successfully")


@bp.route("/members/<string:group_id>", methods=["GET"])
@login_required
def get_group_members(group_id):
    """List a group's members (members only)."""
    db = firestore.client()
    GroupService.get_group_or_404(db, group_id)
    if not roles.is_member(db, group_id, g.user["id"]):
        raise PermissionDeniedError(
            "You must be a member of this group to view its members"
        )
    members = GroupService.get_group_members(db, group_id)
    return api_response("Group members retrieved successfully", members)


@bp.route("/make-admin/<string:group_id>", methods=["POST"])
@login_required
def make_admin(group_id):
    """Promote a member to admin (owner only)."""
    form = MemberActionForm().validate_or_raise()
    GroupService.make_admin(
        firestore.client(), group_id, str(form.userId.data), g.user["id"]
    )
    return api_response("Member promoted to admin successfully")


@bp.route("/remove-member/<string:group_id>", methods=["POST"])
@login_required
def remove_member(group_id):
    """Remove a member (owner or admin only)."""
    form = MemberActionForm().validate_or_raise()
    GroupService.remove_member(
        firestore.client(), group_id, str(form.userId.data), g.user["id"]
    )
    return api_response("Member removed successfully")


@bp.route("/code/<string:group_id>", methods=["GET"])
@login_required
def get_group_code(group_id):
    """Reveal a group's join code (owner only)."""
    db = firestore.client()
    GroupService.get_group_or_404(db, group_id)
    if not roles.is_owner(db, group_id, g.user["id"]):
        raise PermissionDeniedError("Only the group owner can view the group code")
    code = GroupService.get_group_code(db, group_id)
    return api_response("Group code retrieved successfully", {"code": code})


@bp.route("/update-display-name/<string:group_id>", methods=["PUT"])
@login_required
def update_display_name(group_id):
    """Override a group's display name (owner or admin only)."""
    form = DisplayNameForm().validate_or_raise()
    group = GroupService.update_display_name(
        firestore.client(), group_id, g.user["id"], form.displayName.data
    )
    return api_response("Display name updated successfully", group)


@bp.route("/message/<string:group_id>", methods=["POST"])
@login_required
def create_message(group_id):
    """Post a group message (owner or admin only)."""
    form = GroupMessageForm().validate_or_raise()
    message = GroupMessageService.create_message(
        firestore.client(),
        group_id,
        g.user["id"],
        form.message.data,
        is_pinned=bool(form.isPinned.data),
    )
    return api_response("Message created successfully", message, 201)


def _message_in_group(db, group_id, message_id):
    """Raise NotFoundError unless the message exists in the given group."""
    message = GroupMessageService.get_message(db, message_id)
    if message is None or message.get("groupId") != group_id:
        raise NotFoundError("Message not found")
    return message


@bp.route("/message/<string:group_id>/<string:message_id>", methods=["PUT"])
@login_required
def update_message(group_id, message_id):
    """Edit a group message (owner or admin only)."""
    form = GroupMessageForm().validate_or_raise()
    db = firestore.client()
    _message_in_group(db, group_id, message_id)
    message = GroupMessageService.update_message(
        db, message_id, g.user["id"], form.message.data
    )
    return api_response("Message updated successfully", message)


@bp.route("/message/<string:group_id>/<string:message_id>", methods=["DELETE"])
@login_required
def delete_message(group_id, message_id):
    """Delete a group message (owner or admin only)."""
    db = firestore.client()
    _message_in_group(db, group_id, message_id)
    GroupMessageService.delete_message(db, message_id, g.user["id"])
    return api_response("Message deleted successfully")


@bp.route("/message/top/<string:group_id>", methods=["GET"])
def get_top_message(group_id):
    """Return the group's top message, or null when it has none."""
    message = GroupMessageService.get_top_message(firestore.client(), group_id)
    return api_response("Top message retrieved successfully", message)


@bp.route("/message/all/<string:group_id>", methods=["GET"])
def get_all_messages(group_id):
    """List all of a group's messages, pinned first."""
    messages = GroupMessageService.get_all_messages(firestore.client(), group_id)
    return api_response("Messages retrieved successfully", messages)
