from wtforms import StringField, SelectField, DateField, DecimalField, IntegerField, TextAreaField
from wtforms.validators import DataRequired, Optional, Length, NumberRange

from models.cctv import CAMERA_STATUSES, RETIRED_STATUSES
from utils.forms import ApiForm


class CameraForm(ApiForm):
    premise = StringField('Premise', validators=[Optional(), Length(max=100)])
    floor = StringField('Floor', validators=[Optional(), Length(max=100)])
    camera_location = StringField('Location', validators=[DataRequired(), Length(max=200)])
    serial_number = StringField('Serial Number', validators=[Optional(), Length(max=200)])
    model = StringField('Model', validators=[Optional(), Length(max=200)])
    status = SelectField('Status', choices=CAMERA_STATUSES, validators=[Optional()])
    install_date = DateField('Install Date', format='%Y-%m-%d', validators=[Optional()])


class CameraEditForm(ApiForm):
    premise = StringField('Premise', validators=[Optional(), Length(max=100)])
    floor = StringField('Floor', validators=[Optional(), Length(max=100)])
    camera_location = StringField('Location', validators=[Optional(), Length(max=200)])
    serial_number = StringField('Serial Number', validators=[Optional(), Length(max=200)])
    model = StringField('Model', validators=[Optional(), Length(max=200)])
    status = SelectField('Status', choices=CAMERA_STATUSES, validators=[Optional()])
    install_date = DateField('Install Date', format='%Y-%m-%d', validators=[Optional()])


class StatusForm(ApiForm):
    status = SelectField('Status', choices=CAMERA_STATUSES, validators=[DataRequired()])


class CameraRepairForm(ApiForm):
    fault_description = TextAreaField('Fault', validators=[DataRequired()])
    action_taken = TextAreaField('Action Taken', validators=[Optional()])
    cost = DecimalField('Cost', places=2, validators=[Optional(), NumberRange(min=0)])
    date = DateField('Date', format='%Y-%m-%d', validators=[Optional()])
    technician = StringField('Technician', validators=[Optional(), Length(max=150)])


class ReplaceForm(ApiForm):
    new_camera_id = IntegerField('Replacement Camera', validators=[DataRequired()])
    old_status = SelectField('Old Camera Status', choices=RETIRED_STATUSES, validators=[DataRequired()])
    replace_date = DateField('Date', format='%Y-%m-%d', validators=[Optional()])
    technician = StringField('Technician', validators=[Optional(), Length(max=150)])


class LookupForm(ApiForm):
    name = StringField('Name', validators=[DataRequired(), Length(max=100)])
    sort_order = IntegerField('Sort Order', default=0, validators=[Optional()])
