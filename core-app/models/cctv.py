from datetime import date
from sqlalchemy.orm import validates
from extensions import db
from models.base import BaseModel, check_choice

CAMERA_WORKING = 'Working'
CAMERA_FAULTY = 'Faulty'
CAMERA_IN_STOCK = 'In Stock'
CAMERA_DAMAGED = 'Damaged'
CAMERA_STATUSES = (CAMERA_WORKING, CAMERA_FAULTY, CAMERA_IN_STOCK, CAMERA_DAMAGED)

# Statuses a replaced camera may be retired with
RETIRED_STATUSES = (CAMERA_DAMAGED, CAMERA_FAULTY)

UNASSIGNED_FLOOR = 'Unassigned'
REMOVED_SUFFIX = ' (Removed)'


class CCTVCamera(BaseModel):
    __tablename__ = 'cctv'

    id = db.Column(db.Integer, primary_key=True)
    premise = db.Column(db.String(100), nullable=True)
    floor = db.Column(db.String(100), nullable=True)
    camera_location = db.Column(db.String(200), nullable=True, default='')
    serial_number = db.Column(db.String(200), nullable=True)
    model = db.Column(db.String(200), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=CAMERA_WORKING)
    install_date = db.Column(db.Date, nullable=True)

    repairs = db.relationship('CCTVRepair', backref='camera', lazy='dynamic')

    @validates('status')
    def _validate_status(self, key, value):
        return check_choice(key, value, CAMERA_STATUSES)

    @property
    def is_located(self) -> bool:
        """Stock and scrapped cameras are not mounted anywhere."""
        return self.status not in (CAMERA_IN_STOCK, CAMERA_DAMAGED)

    def __repr__(self):
        return f'<CCTVCamera {self.camera_location} {self.serial_number}>'


class CCTVRepair(BaseModel):
    __tablename__ = 'cctv_repairs'

    id = db.Column(db.Integer, primary_key=True)
    cctv_id = db.Column(db.Integer, db.ForeignKey('cctv.id'), nullable=False, index=True)
    fault_description = db.Column(db.Text, nullable=False)
    action_taken = db.Column(db.Text, nullable=True)
    cost = db.Column(db.Numeric(10, 2), nullable=True, default=0)
    date = db.Column(db.Date, nullable=False, default=date.today)
    technician = db.Column(db.String(150), nullable=True)

    def __repr__(self):
        return f'<CCTVRepair cctv={self.cctv_id} {self.fault_description}>'


class Premise(BaseModel):
    __tablename__ = 'premises'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<Premise {self.name}>'


class Floor(BaseModel):
    __tablename__ = 'floors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<Floor {self.name}>'
