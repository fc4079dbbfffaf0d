from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional, URL

from dugout.utils import blank_to_none


class ParkForm(FlaskForm):
    """Form for adding and editing parks"""
    name = StringField('Park Name', validators=[
        DataRequired(message='Park name is required'),
        Length(max=128)
    ])
    address = StringField('Address', validators=[Optional(), Length(max=255)])
    city = StringField('City', validators=[Optional(), Length(max=64)])
    state = StringField('State', validators=[Optional(), Length(max=32)])
    maps_url = StringField('Google Maps Link', validators=[
        Optional(),
        URL(message='Enter a valid URL.'),
        Length(max=512)
    ])

    def park_data(self):
        return {
            'name': self.name.data.strip(),
            'address': blank_to_none(self.address.data),
            'city': blank_to_none(self.city.data),
            'state': blank_to_none(self.state.data),
            'maps_url': blank_to_none(self.maps_url.data),
        }
