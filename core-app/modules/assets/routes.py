from flask import jsonify, request, current_app

from services import assets as asset_service
from utils.forms import validated
from . import assets_bp
from .forms import AssetForm, AssetEditForm, IssueForm, ReturnForm


@assets_bp.route('/', methods=['GET'])
def index():
    rows = asset_service.list_assets(
        search=request.args.get('search', ''),
        status=request.args.get('status', ''),
    )
    return jsonify(rows)


@assets_bp.route('/', methods=['POST'])
def create():
    form = validated(AssetForm)
    asset = asset_service.create_asset(**form.values())
    return jsonify(asset.to_dict()), 201


@assets_bp.route('/<int:asset_id>', methods=['GET'])
def detail(asset_id):
    return jsonify(asset_service.get_asset(asset_id).to_dict())


@assets_bp.route('/<int:asset_id>', methods=['PUT'])
def update(asset_id):
    form = validated(AssetEditForm)
    asset = asset_service.update_asset(asset_id, **form.values(partial=True))
    return jsonify(asset.to_dict())


@assets_bp.route('/<int:asset_id>', methods=['DELETE'])
def delete(asset_id):
    asset_service.delete_asset(asset_id)
    return jsonify({'status': 'success', 'message': 'Asset deleted'})


@assets_bp.route('/<int:asset_id>/history', methods=['GET'])
def history(asset_id):
    return jsonify(asset_service.asset_history(asset_id))


@assets_bp.route('/<int:asset_id>/holder', methods=['GET'])
def holder(asset_id):
    """Current holder of an asset, or null when nobody has it."""
    assignment = asset_service.current_assignment(asset_id)
    if assignment is None:
        return jsonify({'assignment': None, 'staff': None})
    return jsonify({
        'assignment': assignment.to_dict(),
        'staff': assignment.staff.to_dict() if assignment.staff else None,
    })


@assets_bp.route('/<int:asset_id>/issue', methods=['POST'])
def issue(asset_id):
    form = validated(IssueForm)
    assignment = asset_service.issue_asset(
        asset_id, form.staff_id.data, issue_date=form.issue_date.data
    )
    current_app.logger.info('Asset %s issued via API', asset_id)
    return jsonify(assignment.to_dict()), 201


@assets_bp.route('/<int:asset_id>/return', methods=['POST'])
def return_asset(asset_id):
    form = validated(ReturnForm)
    asset, assignment = asset_service.return_asset(
        asset_id,
        return_date=form.return_date.data,
        assignment_id=form.assignment_id.data,
    )
    return jsonify({
        'asset': asset.to_dict(),
        'assignment': assignment.to_dict() if assignment else None,
    })
