"""
Forms for roster management.
"""

from flask import current_app
from flask_wtf import FlaskForm
from wtforms import StringField, SelectField, SelectMultipleField, DateField, IntegerField
from wtforms.validators import DataRequired, Length, Optional, Email, NumberRange
from wtforms.widgets import CheckboxInput, ListWidget

from dugout.utils import blank_to_none


class MultiCheckboxField(SelectMultipleField):
    """Multiple select rendered as a list of checkboxes"""
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class PlayerForm(FlaskForm):
    """Form for adding and editing players"""
    first_name = StringField('First Name', validators=[
        DataRequired(message='First name and last name are required'),
        Length(max=64)
    ])
    last_name = StringField('Last Name', validators=[
        DataRequired(message='First name and last name are required'),
        Length(max=64)
    ])
    jersey_name = StringField('Jersey Name', validators=[Optional(), Length(max=64)])
    phone = StringField('Phone', validators=[Optional(), Length(max=32)])
    email = StringField('Email', validators=[
        Optional(),
        Email(message='Invalid email address.'),
        Length(max=120)
    ])
    address = StringField('Address', validators=[Optional(), Length(max=255)])
    date_of_birth = DateField('Date of Birth', validators=[Optional()])
    gender = SelectField('Gender', default='', validators=[Optional()])
    uniform_number = IntegerField('Uniform Number', validators=[
        Optional(),
        NumberRange(min=0, max=999, message='Uniform number must be between 0 and 999')
    ])
    jersey_size = SelectField('Jersey Size', default='', validators=[Optional()])
    jersey_types = MultiCheckboxField('Jersey Types', validators=[Optional()])

    def __init__(self, *args, **kwargs):
        super(PlayerForm, self).__init__(*args, **kwargs)

        genders = current_app.config.get('GENDERS', {})
        self.gender.choices = [('', 'Select...')] + [(k, v) for k, v in genders.items()]

        sizes = current_app.config.get('JERSEY_SIZES', {})
        self.jersey_size.choices = [('', 'Select size...')] + [
            (size, size) for gender_sizes in sizes.values() for size in gender_sizes
        ]

        self.jersey_types.choices = [
            (j['id'], j['label']) for j in current_app.config.get('JERSEY_TYPES', [])
        ]

    def player_data(self):
        """
        Cleaned values ready to assign to a Player.

        Blank strings become None. A jersey size that does not belong to the
        selected gender is dropped, the same as resetting the size when the
        gender changes.
        """
        gender = self.gender.data or None
        jersey_size = self.jersey_size.data or None
        if jersey_size:
            allowed = current_app.config['JERSEY_SIZES'].get(gender, []) if gender else []
            if jersey_size not in allowed:
                jersey_size = None

        return {
            'first_name': self.first_name.data.strip(),
            'last_name': self.last_name.data.strip(),
            'jersey_name': blank_to_none(self.jersey_name.data),
            'phone': blank_to_none(self.phone.data),
            'email': blank_to_none(self.email.data),
            'address': blank_to_none(self.address.data),
            'date_of_birth': self.date_of_birth.data or None,
            'gender': gender,
            'uniform_number': self.uniform_number.data,
            'jersey_size': jersey_size,
            'jersey_types': list(self.jersey_types.data or []),
        }
