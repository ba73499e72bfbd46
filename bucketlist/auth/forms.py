"""Forms for the auth blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, Email, Length


class SignupForm(FlaskForm):
    """Signup form, submitted as JSON by the client."""

    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=6)])
    first = StringField("First name", validators=[DataRequired(), Length(max=50)])
    last = StringField("Last name", validators=[DataRequired(), Length(max=50)])
