from flask import jsonify

from services.dashboard import summary
from . import dashboard_bp


@dashboard_bp.route('/', methods=['GET'])
def index():
    return jsonify(summary())
