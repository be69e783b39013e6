from flask import Blueprint

repairs_bp = Blueprint(
    'repairs',
    __name__,
    url_prefix='/api/repairs'
)

from . import routes
