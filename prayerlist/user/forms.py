"""Forms for the user blueprint."""

from wtforms import StringField
from wtforms.validators import Length, Optional

from prayerlist.forms import ApiForm


class UserProfileForm(ApiForm):
    """Form for creating or updating the caller's name."""

    firstName = StringField("First Name", validators=[Optional(), Length(max=100)])
    lastName = StringField("Last Name", validators=[Optional(), Length(max=100)])
