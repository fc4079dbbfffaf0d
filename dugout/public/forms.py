from flask_wtf import FlaskForm
from wtforms import HiddenField
from wtforms.validators import DataRequired


class SignatureForm(FlaskForm):
    """Signature pad submission: the drawing as a PNG data URL"""
    signature = HiddenField('Signature', validators=[
        DataRequired(message='Please sign before submitting')
    ])
