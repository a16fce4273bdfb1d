"""Shared base form for JSON request bodies."""

from flask_wtf import FlaskForm
from wtforms import StringField

from .errors import ValidationError


class ApiForm(FlaskForm):
    """A FlaskForm that reads JSON bodies and skips CSRF.

    Clients authenticate with bearer tokens rather than cookies, so
    there is no session for a CSRF token to protect.
    """

    class Meta:
        csrf = False

    def validate_or_raise(self):
        """Validate the submitted body, raising ValidationError on failure."""
        for field in self:
            # Non-string JSON values reach StringField.data unconverted.
            if isinstance(field, StringField) and field.raw_data:
                value = field.raw_data[0]
                if value is not None and not isinstance(value, str):
                    raise ValidationError(f"{field.name}: Must be a string.")
        if self.validate_on_submit():
            return self
        for field_name, messages in self.errors.items():
            if messages:
                raise ValidationError(f"{field_name}: {messages[0]}")
        raise ValidationError()

    def was_provided(self, field_name):
        """Return True if the client sent a value for the field."""
        return bool(getattr(getattr(self, field_name), "raw_data", None))
