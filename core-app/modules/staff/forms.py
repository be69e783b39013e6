from wtforms import StringField
from wtforms.validators import DataRequired, Optional, Length

from utils.forms import ApiForm


class StaffForm(ApiForm):
    employee_id = StringField('Employee ID', validators=[DataRequired(), Length(max=50)])
    name = StringField('Name', validators=[DataRequired(), Length(max=150)])
    department = StringField('Department', validators=[Optional(), Length(max=100)])
