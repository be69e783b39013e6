from flask import jsonify, request

from services import accessories as accessory_service
from services import assets as asset_service
from utils.forms import validated
from . import accessories_bp
from .forms import AccessoryForm, AccessoryEditForm, InstallForm


@accessories_bp.route('/', methods=['GET'])
def index():
    return jsonify(accessory_service.list_accessories(search=request.args.get('search', '')))


@accessories_bp.route('/', methods=['POST'])
def create():
    form = validated(AccessoryForm)
    accessory = accessory_service.create_accessory(**form.values())
    return jsonify(accessory.to_dict()), 201


@accessories_bp.route('/<int:accessory_id>', methods=['PUT'])
def update(accessory_id):
    form = validated(AccessoryEditForm)
    accessory = accessory_service.update_accessory(accessory_id, **form.values(partial=True))
    return jsonify(accessory.to_dict())


@accessories_bp.route('/<int:accessory_id>', methods=['DELETE'])
def delete(accessory_id):
    accessory_service.delete_accessory(accessory_id)
    return jsonify({'status': 'success', 'message': 'Accessory deleted'})


@accessories_bp.route('/assets/<int:asset_id>', methods=['GET'])
def asset_components(asset_id):
    """Installed parts, spare stock and the install trail for one asset."""
    return jsonify(accessory_service.asset_components(asset_id))


@accessories_bp.route('/<int:accessory_id>/history', methods=['GET'])
def history(accessory_id):
    return jsonify(accessory_service.accessory_history(accessory_id))


@accessories_bp.route('/<int:accessory_id>/install', methods=['POST'])
def install(accessory_id):
    form = validated(InstallForm)
    accessory = accessory_service.install_accessory(
        accessory_id, form.asset_id.data, technician=form.technician.data or None
    )
    return jsonify({
        'accessory': accessory.to_dict(),
        'asset': accessory.asset.to_dict() if accessory.asset else None,
    })


@accessories_bp.route('/<int:accessory_id>/remove', methods=['POST'])
def remove(accessory_id):
    form = validated(InstallForm)
    accessory = accessory_service.remove_accessory(
        accessory_id, form.asset_id.data, technician=form.technician.data or None
    )
    asset = asset_service.get_asset(form.asset_id.data)
    return jsonify({'accessory': accessory.to_dict(), 'asset': asset.to_dict()})
