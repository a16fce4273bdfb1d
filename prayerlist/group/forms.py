"""Forms for the group blueprint."""

from wtforms import BooleanField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional

from prayerlist.forms import ApiForm


class GroupForm(ApiForm):
    """Form for creating a new group."""

    name = StringField("Group Name", validators=[DataRequired(), Length(max=100)])
    description = TextAreaField(
        "Description", validators=[DataRequired(), Length(max=1000)]
    )
    isPublic = BooleanField("Public Group")


class JoinGroupForm(ApiForm):
    """Form for joining a group; the code is only needed for private groups."""

    code = StringField("Code", validators=[Optional()])


class MemberActionForm(ApiForm):
    """Form naming the member an owner or admin is acting on."""

    userId = StringField("User", validators=[DataRequired()])


class DisplayNameForm(ApiForm):
    """Form for overriding a group's display name."""

    displayName = StringField(
        "Display Name", validators=[DataRequired(), Length(max=100)]
    )


class GroupMessageForm(ApiForm):
    """Form for posting or editing a group message."""

    message = TextAreaField("Message", validators=[DataRequired(), Length(max=2000)])
    isPinned = BooleanField("Pinned")
