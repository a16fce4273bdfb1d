"""Forms for the prayer request blueprint."""

from wtforms import BooleanField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional

from prayerlist.forms import ApiForm


class PrayerRequestForm(ApiForm):
    """Form for posting a prayer request, publicly or to a group."""

    text = TextAreaField("Prayer Request", validators=[DataRequired(), Length(max=5000)])
    isAnonymous = BooleanField("Post Anonymously")
    groupId = StringField("Group", validators=[Optional()])
    isGroupOnly = BooleanField("Group Only")
