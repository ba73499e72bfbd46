"""Forms for the bucket blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from wtforms import StringField
from wtforms.validators import DataRequired, Length


class BucketTitleForm(FlaskForm):
    """Rename a bucket. An empty title is allowed."""

    bucketId = StringField("bucketId", validators=[DataRequired()])
    bucketTitle = StringField("bucketTitle", validators=[Length(max=100)])
