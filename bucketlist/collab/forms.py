"""Forms for the collaboration blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from wtforms import StringField
from wtforms.validators import DataRequired, Email, Optional


class GenerateInviteForm(FlaskForm):
    """Request a new invite link, optionally mailing it to someone."""

    bucketId = StringField("bucketId", validators=[DataRequired()])
    email = StringField("email", validators=[Optional(), Email()])


class RemoveCollaboratorForm(FlaskForm):
    bucketId = StringField("bucketId", validators=[DataRequired()])
    collaboratorEmail = StringField(
        "collaboratorEmail", validators=[DataRequired(), Email()]
    )
