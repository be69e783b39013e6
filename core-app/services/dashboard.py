"""
Landing page numbers: fleet counts and the latest activity.
"""
from typing import Any, Dict

from flask import current_app

from models.cctv import CCTVCamera, CAMERA_FAULTY
from models.inventory import (
    Asset, Assignment, STATUS_AVAILABLE, STATUS_ISSUED, STATUS_REPAIR,
)
from services.gateway import gateway
from services.repairs import list_repairs

TRACKED_TYPES = ('Laptop', 'Mobile Phone')


def _type_counts(asset_type: str) -> Dict[str, int]:
    return {
        'total': gateway.count(Asset, {'type': asset_type}),
        'issued': gateway.count(Asset, {'type': asset_type, 'status': STATUS_ISSUED}),
        'repair': gateway.count(Asset, {'type': asset_type, 'status': STATUS_REPAIR}),
    }


def summary() -> Dict[str, Any]:
    limit = current_app.config.get('RECENT_ITEMS_LIMIT', 5)

    recent = []
    for a in gateway.select(Assignment, order_by=('-issue_date', '-id'), limit=limit,
                            embed=('staff', 'asset')):
        row = a.to_dict()
        row['staff_name'] = a.staff.name if a.staff else None
        row['asset_model'] = a.asset.model if a.asset else None
        row['asset_serial'] = a.asset.serial_number if a.asset else None
        recent.append(row)

    return {
        'total_assets': gateway.count(Asset),
        'available': gateway.count(Asset, {'status': STATUS_AVAILABLE}),
        'by_type': {t: _type_counts(t) for t in TRACKED_TYPES},
        'faulty_cameras': gateway.count(CCTVCamera, {'status': CAMERA_FAULTY}),
        'recent_repairs': list_repairs(limit=limit),
        'recent_assignments': recent,
    }
