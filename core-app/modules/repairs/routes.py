from flask import jsonify, request

from services import repairs as repair_service
from utils.forms import validated
from . import repairs_bp
from .forms import RepairForm


@repairs_bp.route('/', methods=['GET'])
def index():
    limit = request.args.get('limit', type=int)
    return jsonify(repair_service.list_repairs(limit=limit))


@repairs_bp.route('/', methods=['POST'])
def create():
    form = validated(RepairForm)
    repair = repair_service.create_repair(
        form.asset_id.data,
        form.fault_description.data,
        parts_replaced=form.parts_replaced.data or '',
        cost=form.cost.data,
        repair_date=form.date.data,
        technician=form.technician.data or None,
        cannibalized_from_id=form.cannibalized_from_id.data,
    )
    return jsonify(repair.to_dict()), 201
