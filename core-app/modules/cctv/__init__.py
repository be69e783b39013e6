from flask import Blueprint

cctv_bp = Blueprint(
    'cctv',
    __name__,
    url_prefix='/api/cctv'
)

from . import routes
