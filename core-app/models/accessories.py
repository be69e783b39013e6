from datetime import datetime
from sqlalchemy.orm import validates
from extensions import db
from models.base import BaseModel, check_choice

TYPE_RAM = 'RAM'
# "Othe Storage" is a misspelling that exists in stored data; both spellings count.
STORAGE_TYPES = ('Storage', 'HDD', 'SSD', 'Othe Storage', 'Other Storage')
ACCESSORY_TYPES = (TYPE_RAM,) + STORAGE_TYPES + (
    'Mouse', 'Keyboard', 'Monitor', 'Adapter', 'Cable', 'Other'
)

ACCESSORY_AVAILABLE = 'Available'
ACCESSORY_INSTALLED = 'Installed'
ACCESSORY_FAULTY = 'Faulty'
ACCESSORY_STATUSES = (ACCESSORY_AVAILABLE, ACCESSORY_INSTALLED, ACCESSORY_FAULTY)

ACTION_INSTALLED = 'Installed'
ACTION_REMOVED = 'Removed'
LOG_ACTIONS = (ACTION_INSTALLED, ACTION_REMOVED)


class Accessory(BaseModel):
    __tablename__ = 'accessories'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(50), nullable=False)
    brand = db.Column(db.String(100), nullable=True)
    # Holds the spec value, e.g. "16GB" or "512GB SSD"
    model = db.Column(db.String(200), nullable=False)
    serial_number = db.Column(db.String(200), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=ACCESSORY_AVAILABLE)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=True, index=True)

    # Relationships
    asset = db.relationship('Asset', backref=db.backref('accessories', lazy='dynamic'))
    logs = db.relationship('AccessoryLog', backref='accessory', lazy='dynamic')

    @validates('type')
    def _validate_type(self, key, value):
        return check_choice(key, value, ACCESSORY_TYPES)

    @validates('status')
    def _validate_status(self, key, value):
        return check_choice(key, value, ACCESSORY_STATUSES)

    def __repr__(self):
        return f'<Accessory {self.type} {self.model}>'


class AccessoryLog(BaseModel):
    """Append-only trail of install/remove events."""
    __tablename__ = 'accessory_logs'

    id = db.Column(db.Integer, primary_key=True)
    accessory_id = db.Column(db.Integer, db.ForeignKey('accessories.id'), nullable=False, index=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False, index=True)
    action = db.Column(db.String(20), nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    technician = db.Column(db.String(150), nullable=True)

    asset = db.relationship('Asset', backref=db.backref('accessory_logs', lazy='dynamic'))

    @validates('action')
    def _validate_action(self, key, value):
        return check_choice(key, value, LOG_ACTIONS)

    def __repr__(self):
        return f'<AccessoryLog {self.action} accessory={self.accessory_id} asset={self.asset_id}>'
