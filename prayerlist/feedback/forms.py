"""Forms for the feedback blueprint."""

from wtforms import TextAreaField
from wtforms.validators import DataRequired, Length

from prayerlist.forms import ApiForm


class FeedbackForm(ApiForm):
    """Form for leaving free-text feedback."""

    text = TextAreaField("Feedback", validators=[DataRequired(), Length(max=5000)])
