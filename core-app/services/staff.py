"""
Staff directory and the per-person view of issued assets.
"""
import logging
from collections import Counter
from typing import Any, Dict, List

from flask import current_app

from models.inventory import Assignment, Staff
from services.gateway import IS_NULL, NOT_NULL, gateway
from utils.errors import EntityInUse

logger = logging.getLogger(__name__)


def create_staff(**values) -> Staff:
    with gateway.transaction('create staff'):
        staff = gateway.insert(Staff, **values)
    logger.info('Created staff %s (%s)', staff.id, staff.employee_id)
    return staff


def delete_staff(staff_id: int) -> None:
    with gateway.transaction('delete staff'):
        staff = gateway.get(Staff, staff_id)
        if gateway.count(Assignment, {'staff_id': staff.id}):
            raise EntityInUse(f'{staff.name} has assignment history and cannot be deleted')
        gateway.delete(staff)
    logger.info('Deleted staff %s', staff_id)


def list_staff(search: str = '') -> List[Dict[str, Any]]:
    """Staff by name with the number of assets each one currently holds."""
    staff = gateway.select(Staff, order_by=('name',))
    active = Counter(
        a.staff_id for a in gateway.select(Assignment, {'return_date': IS_NULL})
    )
    term = (search or '').strip().lower()
    rows = []
    for person in staff:
        if term and not any(term in (v or '').lower()
                            for v in (person.name, person.employee_id, person.department)):
            continue
        row = person.to_dict()
        row['active_assignments'] = active.get(person.id, 0)
        rows.append(row)
    return rows


def _with_asset(assignment: Assignment) -> Dict[str, Any]:
    row = assignment.to_dict()
    asset = assignment.asset
    if asset is not None:
        row['asset'] = {
            'model': asset.model,
            'serial_number': asset.serial_number,
            'type': asset.type,
        }
    return row


def staff_details(staff_id: int) -> Dict[str, Any]:
    """A staff member, what they hold now, and their latest returns."""
    staff = gateway.get(Staff, staff_id)
    holding = gateway.select(
        Assignment, {'staff_id': staff.id, 'return_date': IS_NULL},
        order_by=('-issue_date', '-id'), embed=('asset',),
    )
    returned = gateway.select(
        Assignment, {'staff_id': staff.id, 'return_date': NOT_NULL},
        order_by=('-return_date', '-id'), embed=('asset',),
        limit=current_app.config.get('RECENT_ITEMS_LIMIT', 5),
    )
    return {
        'staff': staff.to_dict(),
        'active': [_with_asset(a) for a in holding],
        'history': [_with_asset(a) for a in returned],
    }
