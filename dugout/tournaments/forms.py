"""
Forms for tournaments, invitations, documents, lodging and the AFA export.
"""

from flask import current_app
from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed, FileRequired
from wtforms import (
    StringField, SelectField, SelectMultipleField, DateField, DecimalField,
    IntegerField, BooleanField
)
from wtforms.validators import DataRequired, Length, Optional, NumberRange, URL, ValidationError

from dugout.utils import blank_to_none


class TournamentForm(FlaskForm):
    """Form for creating and editing tournaments"""
    name = StringField('Tournament Name', validators=[
        DataRequired(message='Tournament name and date are required'),
        Length(max=255)
    ])
    type = SelectField('Type', choices=[('coed', 'Coed'), ('mens', 'Mens')], default='coed')
    date = DateField('Date', validators=[
        DataRequired(message='Tournament name and date are required')
    ])
    location = StringField('Location', validators=[Optional(), Length(max=255)])
    park_id = SelectField('Primary Park', coerce=int, default=0, validators=[Optional()])
    park_ids = SelectMultipleField('Parks', coerce=int, validators=[Optional()])
    total_cost = DecimalField('Total Cost', places=2, validators=[
        Optional(),
        NumberRange(min=0, message='Total cost cannot be negative')
    ])
    additional_fees = DecimalField('Additional Fees', places=2, validators=[
        Optional(),
        NumberRange(min=0, message='Additional fees cannot be negative')
    ])
    venmo_link = StringField('Venmo Link', validators=[Optional(), Length(max=512)])

    def __init__(self, parks=(), *args, **kwargs):
        super(TournamentForm, self).__init__(*args, **kwargs)
        self.type.choices = list(current_app.config['TOURNAMENT_TYPES'].items())
        self.park_id.choices = [(0, 'No park')] + [(p.id, p.name) for p in parks]
        self.park_ids.choices = [(p.id, p.name) for p in parks]

    def tournament_data(self):
        return {
            'name': self.name.data.strip(),
            'type': self.type.data,
            'date': self.date.data,
            'location': blank_to_none(self.location.data),
            'park_id': self.park_id.data or None,
            'total_cost': self.total_cost.data,
            'additional_fees': self.additional_fees.data,
            'venmo_link': blank_to_none(self.venmo_link.data),
        }


class InviteForm(FlaskForm):
    """Pick one or more players to invite"""
    player_ids = SelectMultipleField('Players', coerce=int, validators=[
        DataRequired(message='Select at least one player to invite')
    ])

    def __init__(self, players=(), *args, **kwargs):
        super(InviteForm, self).__init__(*args, **kwargs)
        self.player_ids.choices = [(p.id, p.full_name) for p in players]


class DocumentForm(FlaskForm):
    """Upload a PDF or image for a tournament"""
    name = StringField('Document Name', validators=[Optional(), Length(max=255)])
    file = FileField('File', validators=[
        FileRequired(message='Please choose a file to upload'),
        FileAllowed(['pdf', 'png', 'jpg', 'jpeg', 'gif', 'webp', 'heic'],
                    'Please upload a PDF or image file')
    ])
    is_waiver = BooleanField('This is the waiver')

    def validate_file(self, field):
        """Reject files over the configured size limit"""
        upload = field.data
        if not upload:
            return
        upload.stream.seek(0, 2)
        size = upload.stream.tell()
        upload.stream.seek(0)
        if size > current_app.config['DOCUMENT_MAX_SIZE']:
            raise ValidationError('File size must be less than 10MB')


class TournamentImageForm(FlaskForm):
    image = FileField('Image', validators=[
        FileRequired(message='Please choose an image'),
        FileAllowed(['png', 'jpg', 'jpeg', 'gif', 'webp'], 'Please upload an image file')
    ])


class LodgingForm(FlaskForm):
    """Form for adding and editing lodging options"""
    name = StringField('Name', validators=[
        DataRequired(message='Lodging name is required'),
        Length(max=255)
    ])
    url = StringField('Link', validators=[Optional(), URL(message='Enter a valid URL.'), Length(max=512)])
    capacity = IntegerField('Capacity', validators=[
        Optional(),
        NumberRange(min=0, message='Capacity cannot be negative')
    ])
    total_cost = DecimalField('Total Cost', places=2, validators=[Optional(), NumberRange(min=0)])
    additional_fees = DecimalField('Additional Fees', places=2, validators=[Optional(), NumberRange(min=0)])
    venmo_link = StringField('Venmo Link', validators=[Optional(), Length(max=512)])

    def lodging_data(self):
        return {
            'name': self.name.data.strip(),
            'url': blank_to_none(self.url.data),
            'capacity': self.capacity.data,
            'total_cost': self.total_cost.data,
            'additional_fees': self.additional_fees.data,
            'venmo_link': blank_to_none(self.venmo_link.data),
        }


class InvitationLodgingForm(FlaskForm):
    """An invitee's lodging choice"""
    lodging_id = SelectField('Lodging', coerce=int, default=0, validators=[Optional()])
    lodging_status = SelectField('Staying', choices=[('', 'Undecided'), ('in', 'In'), ('out', 'Out')],
                                 default='', validators=[Optional()])
    lodging_adults = IntegerField('Adults', default=1, validators=[
        Optional(),
        NumberRange(min=0, max=20, message='Adults must be between 0 and 20')
    ])
    lodging_kids = IntegerField('Kids', default=0, validators=[
        Optional(),
        NumberRange(min=0, max=20, message='Kids must be between 0 and 20')
    ])

    def __init__(self, lodging_options=(), *args, **kwargs):
        super(InvitationLodgingForm, self).__init__(*args, **kwargs)
        self.lodging_id.choices = [(0, 'None')] + [(o.id, o.name) for o in lodging_options]

    def lodging_data(self):
        return {
            'lodging_id': self.lodging_id.data or None,
            'lodging_status': self.lodging_status.data or None,
            'lodging_adults': self.lodging_adults.data if self.lodging_adults.data is not None else 1,
            'lodging_kids': self.lodging_kids.data if self.lodging_kids.data is not None else 0,
        }


class AFAExportForm(FlaskForm):
    """Team and manager details printed on the AFA roster form"""
    team_name = StringField('Team Name', validators=[Optional(), Length(max=64)])
    team_class = StringField('Class', validators=[Optional(), Length(max=8)])
    afa_membership = StringField('AFA Membership #', validators=[Optional(), Length(max=32)])
    manager_name = StringField('Manager', validators=[Optional(), Length(max=128)])
    manager_email = StringField('Manager Email', validators=[Optional(), Length(max=120)])
    manager_phone = StringField('Manager Phone', validators=[Optional(), Length(max=32)])
    manager_cell = StringField('Manager Cell', validators=[Optional(), Length(max=32)])
    manager_address = StringField('Manager Address', validators=[Optional(), Length(max=255)])
    manager_city = StringField('City', validators=[Optional(), Length(max=64)])
    manager_state = StringField('State', validators=[Optional(), Length(max=32)])
    manager_zip = StringField('Zip', validators=[Optional(), Length(max=16)])

    def overrides(self):
        """Entered values; blanks fall back to the configured defaults"""
        values = {}
        for name in ('team_name', 'team_class', 'afa_membership', 'manager_name', 'manager_email',
                     'manager_phone', 'manager_cell', 'manager_address', 'manager_city',
                     'manager_state', 'manager_zip'):
            value = blank_to_none(getattr(self, name).data)
            if value is not None:
                values[name] = value
        return values


class DivisorForm(FlaskForm):
    """Optional custom number of players to split the cost between"""
    class Meta:
        csrf = False

    divisor = IntegerField('Split between', validators=[
        Optional(),
        NumberRange(min=0, message='Divisor cannot be negative')
    ])

