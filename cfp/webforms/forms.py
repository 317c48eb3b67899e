from flask_wtf import FlaskForm
from wtforms import EmailField, StringField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Optional


class SessionForm(FlaskForm):
    title = StringField('Title', validators=[DataRequired(), Length(max=255)])
    description = TextAreaField('Description')
    first_presenter_email = EmailField('First presenter email',
                                       validators=[Optional(), Email(), Length(max=100)])
    second_presenter_email = EmailField('Second presenter email',
                                        validators=[Optional(), Email(), Length(max=100)])

    def validate_submitted(self, submitted):
        """Run the validators of the submitted fields only, so a PATCH may carry a subset."""
        valid = True
        for name, field in self._fields.items():
            if name in submitted or name == 'csrf_token':
                valid = field.validate(self) and valid
        return valid
