"""
Category Forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import InputRequired, Length, Optional, Regexp

from utils.validators import HEX_COLOR

COLOR_MESSAGE = 'Color must be a valid hex color (e.g., #3B82F6)'


class CategoryForm(FlaskForm):
    name = StringField('Name', validators=[
        InputRequired(message='Category name is required'),
        Length(min=1, max=50, message='Category name must be between 1 and 50 characters')
    ])
    color = StringField('Color', validators=[
        InputRequired(message='Color is required'),
        Regexp(HEX_COLOR, message=COLOR_MESSAGE)
    ])
    icon = StringField('Icon', validators=[Optional(), Length(max=50)])


class CategoryUpdateForm(FlaskForm):
    name = StringField('Name', validators=[
        Optional(),
        Length(min=1, max=50, message='Category name must be between 1 and 50 characters')
    ])
    color = StringField('Color', validators=[Optional(), Regexp(HEX_COLOR, message=COLOR_MESSAGE)])
    icon = StringField('Icon', validators=[Optional(), Length(max=50)])
