from flask import Blueprint

accessories_bp = Blueprint(
    'accessories',
    __name__,
    url_prefix='/api/accessories'
)

from . import routes
