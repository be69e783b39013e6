from flask import Blueprint

staff_bp = Blueprint(
    'staff',
    __name__,
    url_prefix='/api/staff'
)

from . import routes
