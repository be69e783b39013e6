from wtforms import StringField, SelectField, IntegerField
from wtforms.validators import DataRequired, Optional, Length

from models.accessories import ACCESSORY_TYPES, ACCESSORY_STATUSES
from utils.forms import ApiForm


class AccessoryForm(ApiForm):
    type = SelectField('Type', choices=ACCESSORY_TYPES, validators=[DataRequired()])
    brand = StringField('Brand', validators=[Optional(), Length(max=100)])
    model = StringField('Spec / Model', validators=[DataRequired(), Length(max=200)])
    serial_number = StringField('Serial Number', validators=[Optional(), Length(max=200)])
    status = SelectField('Status', choices=ACCESSORY_STATUSES, validators=[Optional()])


class AccessoryEditForm(ApiForm):
    type = SelectField('Type', choices=ACCESSORY_TYPES, validators=[Optional()])
    brand = StringField('Brand', validators=[Optional(), Length(max=100)])
    model = StringField('Spec / Model', validators=[Optional(), Length(max=200)])
    serial_number = StringField('Serial Number', validators=[Optional(), Length(max=200)])
    status = SelectField('Status', choices=ACCESSORY_STATUSES, validators=[Optional()])


class InstallForm(ApiForm):
    asset_id = IntegerField('Asset', validators=[DataRequired()])
    technician = StringField('Technician', validators=[Optional(), Length(max=150)])
