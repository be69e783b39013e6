from wtforms import StringField, TextAreaField, DateField, DecimalField, IntegerField
from wtforms.validators import DataRequired, Optional, NumberRange, Length

from utils.forms import ApiForm


class RepairForm(ApiForm):
    asset_id = IntegerField('Asset', validators=[DataRequired()])
    fault_description = TextAreaField('Fault', validators=[DataRequired()])
    parts_replaced = TextAreaField('Parts Replaced', validators=[Optional()])
    cost = DecimalField('Cost', places=2, validators=[Optional(), NumberRange(min=0)])
    date = DateField('Date', format='%Y-%m-%d', validators=[Optional()])
    technician = StringField('Technician', validators=[Optional(), Length(max=150)])
    # Asset the replacement parts were taken from, if any
    cannibalized_from_id = IntegerField('Parts Source', validators=[Optional()])
