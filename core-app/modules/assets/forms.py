from wtforms import StringField, SelectField, DateField, IntegerField
from wtforms.validators import DataRequired, Optional, Length

from models.inventory import ASSET_TYPES, ASSET_STATUSES
from utils.forms import ApiForm


class AssetForm(ApiForm):
    serial_number = StringField('Serial Number', validators=[DataRequired(), Length(max=200)])
    model = StringField('Model', validators=[DataRequired(), Length(max=200)])
    type = SelectField('Type', choices=ASSET_TYPES, validators=[DataRequired()])
    status = SelectField('Status', choices=ASSET_STATUSES, validators=[Optional()])
    specs_processor = StringField('Processor', validators=[Optional(), Length(max=200)])
    specs_ram = StringField('RAM', validators=[Optional(), Length(max=200)])
    specs_storage = StringField('Storage', validators=[Optional(), Length(max=200)])
    specs_storage_2 = StringField('Storage 2', validators=[Optional(), Length(max=200)])
    specs_os = StringField('OS', validators=[Optional(), Length(max=200)])


class AssetEditForm(ApiForm):
    # PUT is partial: only submitted fields change
    serial_number = StringField('Serial Number', validators=[Optional(), Length(max=200)])
    model = StringField('Model', validators=[Optional(), Length(max=200)])
    type = SelectField('Type', choices=ASSET_TYPES, validators=[Optional()])
    status = SelectField('Status', choices=ASSET_STATUSES, validators=[Optional()])
    specs_processor = StringField('Processor', validators=[Optional(), Length(max=200)])
    specs_ram = StringField('RAM', validators=[Optional(), Length(max=200)])
    specs_storage = StringField('Storage', validators=[Optional(), Length(max=200)])
    specs_storage_2 = StringField('Storage 2', validators=[Optional(), Length(max=200)])
    specs_os = StringField('OS', validators=[Optional(), Length(max=200)])


class IssueForm(ApiForm):
    staff_id = IntegerField('Staff', validators=[DataRequired()])
    issue_date = DateField('Issue Date', format='%Y-%m-%d', validators=[Optional()])


class ReturnForm(ApiForm):
    return_date = DateField('Return Date', format='%Y-%m-%d', validators=[Optional()])
    assignment_id = IntegerField('Assignment', validators=[Optional()])
