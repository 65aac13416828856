from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import InputRequired, Length


class RestoreForm(FlaskForm):
    filename = StringField('Filename', validators=[
        InputRequired(message='Backup filename is required'),
        Length(max=255)
    ])
