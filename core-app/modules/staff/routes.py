from flask import jsonify, request

from services import staff as staff_service
from utils.forms import validated
from . import staff_bp
from .forms import StaffForm


@staff_bp.route('/', methods=['GET'])
def index():
    return jsonify(staff_service.list_staff(search=request.args.get('search', '')))


@staff_bp.route('/', methods=['POST'])
def create():
    form = validated(StaffForm)
    staff = staff_service.create_staff(**form.values())
    return jsonify(staff.to_dict()), 201


@staff_bp.route('/<int:staff_id>', methods=['GET'])
def detail(staff_id):
    return jsonify(staff_service.staff_details(staff_id))


@staff_bp.route('/<int:staff_id>', methods=['DELETE'])
def delete(staff_id):
    staff_service.delete_staff(staff_id)
    return jsonify({'status': 'success', 'message': 'Staff deleted'})
