from flask import jsonify, request, current_app

from services import cctv as cctv_service
from utils.forms import validated
from . import cctv_bp
from .forms import (
    CameraForm, CameraEditForm, StatusForm, CameraRepairForm, ReplaceForm, LookupForm
)


@cctv_bp.route('/', methods=['GET'])
def index():
    return jsonify([c.to_dict() for c in cctv_service.list_cameras()])


@cctv_bp.route('/', methods=['POST'])
def create():
    form = validated(CameraForm)
    camera = cctv_service.create_camera(**form.values())
    return jsonify(camera.to_dict()), 201


@cctv_bp.route('/board', methods=['GET'])
def board():
    """Cameras of one premise grouped by floor, plus stock and scrap."""
    result = cctv_service.camera_board(
        premise=request.args.get('premise') or None,
        sort_mode=request.args.get('sort', 'location'),
        search=request.args.get('search', ''),
    )
    return jsonify(result.to_dict())


@cctv_bp.route('/stock', methods=['GET'])
def stock():
    return jsonify([c.to_dict() for c in cctv_service.stock_cameras()])


@cctv_bp.route('/<int:camera_id>', methods=['PUT'])
def update(camera_id):
    form = validated(CameraEditForm)
    camera = cctv_service.update_camera(camera_id, **form.values(partial=True))
    return jsonify(camera.to_dict())


@cctv_bp.route('/<int:camera_id>', methods=['DELETE'])
def delete(camera_id):
    cctv_service.delete_camera(camera_id)
    return jsonify({'status': 'success', 'message': 'Camera deleted'})


@cctv_bp.route('/<int:camera_id>/status', methods=['POST'])
def set_status(camera_id):
    form = validated(StatusForm)
    camera = cctv_service.set_camera_status(camera_id, form.status.data)
    return jsonify(camera.to_dict())


@cctv_bp.route('/<int:camera_id>/history', methods=['GET'])
def history(camera_id):
    return jsonify(cctv_service.camera_history(camera_id))


@cctv_bp.route('/<int:camera_id>/repairs', methods=['POST'])
def log_repair(camera_id):
    form = validated(CameraRepairForm)
    repair = cctv_service.log_camera_repair(
        camera_id,
        form.fault_description.data,
        action_taken=form.action_taken.data or '',
        cost=form.cost.data,
        repair_date=form.date.data,
        technician=form.technician.data or None,
    )
    return jsonify(repair.to_dict()), 201


@cctv_bp.route('/<int:camera_id>/replace', methods=['POST'])
def replace(camera_id):
    form = validated(ReplaceForm)
    result = cctv_service.replace_camera(
        camera_id,
        form.new_camera_id.data,
        form.old_status.data,
        replace_date=form.replace_date.data,
        technician=form.technician.data or None,
    )
    current_app.logger.info('Camera %s replaced via API', camera_id)
    return jsonify({'old': result['old'].to_dict(), 'new': result['new'].to_dict()})


@cctv_bp.route('/premises', methods=['GET'])
def premises():
    return jsonify([p.to_dict() for p in cctv_service.list_premises()])


@cctv_bp.route('/premises', methods=['POST'])
def create_premise():
    form = validated(LookupForm)
    premise = cctv_service.create_premise(form.name.data, form.sort_order.data or 0)
    return jsonify(premise.to_dict()), 201


@cctv_bp.route('/premises/<int:premise_id>', methods=['DELETE'])
def delete_premise(premise_id):
    cctv_service.delete_premise(premise_id)
    return jsonify({'status': 'success', 'message': 'Premise deleted'})


@cctv_bp.route('/floors', methods=['GET'])
def floors():
    return jsonify([f.to_dict() for f in cctv_service.list_floors()])


@cctv_bp.route('/floors', methods=['POST'])
def create_floor():
    form = validated(LookupForm)
    floor = cctv_service.create_floor(form.name.data, form.sort_order.data or 0)
    return jsonify(floor.to_dict()), 201


@cctv_bp.route('/floors/<int:floor_id>', methods=['DELETE'])
def delete_floor(floor_id):
    cctv_service.delete_floor(floor_id)
    return jsonify({'status': 'success', 'message': 'Floor deleted'})
