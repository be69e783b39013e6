from datetime import date
from sqlalchemy.orm import validates
from extensions import db
from models.base import BaseModel, check_choice

ASSET_TYPES = (
    'Laptop', 'Desktop', 'Mobile Phone', 'Monitor', 'Printer', 'Networking', 'Peripheral'
)

STATUS_AVAILABLE = 'Available'
STATUS_ISSUED = 'Issued'
STATUS_REPAIR = 'Repair'
STATUS_SCRAP = 'Scrap'
ASSET_STATUSES = (STATUS_AVAILABLE, STATUS_ISSUED, STATUS_REPAIR, STATUS_SCRAP)

# Statuses that end an issue: moving here closes the open assignment.
RELEASING_STATUSES = (STATUS_AVAILABLE, STATUS_SCRAP)


class Asset(BaseModel):
    __tablename__ = 'assets'

    id = db.Column(db.Integer, primary_key=True)
    serial_number = db.Column(db.String(200), unique=True, nullable=False)
    model = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_AVAILABLE)

    # Free-text spec fields, rewritten by accessory install/remove
    specs_processor = db.Column(db.String(200), nullable=True, default='')
    specs_ram = db.Column(db.String(200), nullable=True, default='')
    specs_storage = db.Column(db.String(200), nullable=True, default='')
    specs_storage_2 = db.Column(db.String(200), nullable=True, default='')
    specs_os = db.Column(db.String(200), nullable=True, default='')

    # Relationships
    assignments = db.relationship('Assignment', backref='asset', lazy='dynamic')
    repairs = db.relationship('Repair', backref='asset', lazy='dynamic')

    @validates('type')
    def _validate_type(self, key, value):
        return check_choice(key, value, ASSET_TYPES)

    @validates('status')
    def _validate_status(self, key, value):
        return check_choice(key, value, ASSET_STATUSES)

    def __repr__(self):
        return f'<Asset {self.serial_number}>'


class Staff(BaseModel):
    __tablename__ = 'staff'

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(150), nullable=False)
    department = db.Column(db.String(100), nullable=True)

    assignments = db.relationship('Assignment', backref='staff', lazy='dynamic')

    def __repr__(self):
        return f'<Staff {self.employee_id} {self.name}>'


class Assignment(BaseModel):
    __tablename__ = 'assignments'

    id = db.Column(db.Integer, primary_key=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False, index=True)
    staff_id = db.Column(db.Integer, db.ForeignKey('staff.id'), nullable=False, index=True)

    issue_date = db.Column(db.Date, nullable=False, default=date.today)
    # NULL while the asset is still out with the staff member
    return_date = db.Column(db.Date, nullable=True)

    @property
    def is_open(self) -> bool:
        return self.return_date is None

    def __repr__(self):
        return f'<Assignment asset={self.asset_id} staff={self.staff_id}>'


class Repair(BaseModel):
    __tablename__ = 'repairs'

    id = db.Column(db.Integer, primary_key=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False, index=True)
    fault_description = db.Column(db.Text, nullable=False)
    parts_replaced = db.Column(db.Text, nullable=True, default='')
    cost = db.Column(db.Numeric(10, 2), nullable=True, default=0)
    date = db.Column(db.Date, nullable=False, default=date.today)
    technician = db.Column(db.String(150), nullable=True)

    def __repr__(self):
        return f'<Repair asset={self.asset_id} {self.date}>'
