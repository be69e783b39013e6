"""
Asset lifecycle: create/edit/delete, issue and return, and the read models
built around an asset (listing with holders, history).

Invariant kept by this module: an asset is Issued exactly when it has an open
assignment (``return_date`` is NULL). Issue refuses a second open assignment;
editing an asset to Available or Scrap closes whatever is still open.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from models.accessories import Accessory, AccessoryLog
from models.inventory import (
    Asset, Assignment, Repair, Staff, RELEASING_STATUSES,
    STATUS_AVAILABLE, STATUS_ISSUED, STATUS_REPAIR, STATUS_SCRAP,
)
from services.gateway import IS_NULL, gateway
from utils.errors import EntityInUse, InvalidTransition

logger = logging.getLogger(__name__)


def get_asset(asset_id: int) -> Asset:
    return gateway.get(Asset, asset_id)


def open_assignments(asset_id: int) -> List[Assignment]:
    """Open assignments of an asset, most recently issued first."""
    return gateway.select(
        Assignment,
        {'asset_id': asset_id, 'return_date': IS_NULL},
        order_by=('-issue_date', '-id'),
    )


def current_assignment(asset_id: int) -> Optional[Assignment]:
    """Who holds the asset right now, if anyone."""
    return gateway.first(
        Assignment,
        {'asset_id': asset_id, 'return_date': IS_NULL},
        order_by=('-issue_date', '-id'),
        embed=('staff',),
    )


def _close_open_assignments(asset_id: int, when: date) -> List[Assignment]:
    closed = open_assignments(asset_id)
    if len(closed) > 1:
        logger.warning('Asset %s had %d open assignments; closing all', asset_id, len(closed))
    for assignment in closed:
        gateway.update(assignment, return_date=when)
    return closed


def create_asset(**values) -> Asset:
    status = values.pop('status', None) or STATUS_AVAILABLE
    if status == STATUS_ISSUED:
        raise InvalidTransition('New assets cannot start as Issued; issue them to a staff member instead')
    with gateway.transaction('create asset'):
        asset = gateway.insert(Asset, status=status, **values)
    logger.info('Created asset %s (%s)', asset.id, asset.serial_number)
    return asset


def update_asset(asset_id: int, **values) -> Asset:
    """
    Edit an asset.

    Moving to Available or Scrap closes the open assignment on the same
    transaction. Repair keeps it open. Issued can only be kept, never entered.
    """
    with gateway.transaction('update asset'):
        asset = gateway.get(Asset, asset_id)
        new_status = values.get('status') or asset.status
        values['status'] = new_status
        if new_status == STATUS_ISSUED and asset.status != STATUS_ISSUED:
            raise InvalidTransition('Use the issue operation to mark an asset as Issued')
        if new_status in RELEASING_STATUSES:
            closed = _close_open_assignments(asset.id, date.today())
            if closed:
                logger.info('Asset %s set to %s, closed assignment(s) %s',
                            asset.id, new_status, [a.id for a in closed])
        gateway.update(asset, **values)
    return asset


def delete_asset(asset_id: int) -> None:
    with gateway.transaction('delete asset'):
        asset = gateway.get(Asset, asset_id)
        references = {
            'assignments': gateway.count(Assignment, {'asset_id': asset.id}),
            'repairs': gateway.count(Repair, {'asset_id': asset.id}),
            'accessory logs': gateway.count(AccessoryLog, {'asset_id': asset.id}),
            'installed accessories': gateway.count(Accessory, {'asset_id': asset.id}),
        }
        in_use = [name for name, total in references.items() if total]
        if in_use:
            raise EntityInUse(f'Asset {asset.serial_number} still has {", ".join(in_use)}')
        gateway.delete(asset)
    logger.info('Deleted asset %s', asset_id)


def issue_asset(asset_id: int, staff_id: int, issue_date: Optional[date] = None) -> Assignment:
    with gateway.transaction('issue asset'):
        asset = gateway.get(Asset, asset_id)
        staff = gateway.get(Staff, staff_id)
        if asset.status == STATUS_SCRAP:
            raise InvalidTransition(f'Asset {asset.serial_number} is scrapped')
        held = current_assignment(asset.id)
        if held is not None and asset.status == STATUS_REPAIR and held.staff_id == staff.id:
            # back from repair to the same holder
            gateway.update(asset, status=STATUS_ISSUED)
            logger.info('Asset %s back from repair with staff %s (assignment %s)',
                        asset.id, staff.id, held.id)
            return held
        if held is not None:
            raise InvalidTransition(
                f'Asset {asset.serial_number} is already issued (assignment {held.id})'
            )
        assignment = gateway.insert(
            Assignment,
            asset_id=asset.id,
            staff_id=staff.id,
            issue_date=issue_date or date.today(),
            return_date=None,
        )
        gateway.update(asset, status=STATUS_ISSUED)
    logger.info('Issued asset %s to staff %s (assignment %s)', asset.id, staff.id, assignment.id)
    return assignment


def return_asset(asset_id: int, return_date: Optional[date] = None,
                 assignment_id: Optional[int] = None) -> Tuple[Asset, Optional[Assignment]]:
    """
    Put an asset back to Available and close its assignment.

    Without ``assignment_id`` the most recently issued open assignment is
    closed. A missing assignment is logged, not raised: the status still changes.
    """
    with gateway.transaction('return asset'):
        asset = gateway.get(Asset, asset_id)
        if assignment_id is not None:
            assignment = gateway.get(Assignment, assignment_id)
            if assignment.asset_id != asset.id:
                raise InvalidTransition(
                    f'Assignment {assignment.id} does not belong to asset {asset.id}'
                )
        else:
            candidates = open_assignments(asset.id)
            if len(candidates) > 1:
                logger.warning('Asset %s has %d open assignments; returning the latest only',
                               asset.id, len(candidates))
            assignment = candidates[0] if candidates else None

        gateway.update(asset, status=STATUS_AVAILABLE)
        if assignment is not None:
            gateway.update(assignment, return_date=return_date or date.today())
        else:
            logger.warning('Asset %s returned without an open assignment', asset.id)
    return asset, assignment


def list_assets(search: str = '', status: str = '') -> List[Dict[str, Any]]:
    """Assets newest first, each with the name of its current holder."""
    assets = gateway.select(
        Asset, {'status': status} if status else None, order_by=('-created_at', '-id')
    )
    holders = {
        a.asset_id: a.staff.name if a.staff else None
        for a in gateway.select(Assignment, {'return_date': IS_NULL}, embed=('staff',))
    }
    term = (search or '').strip().lower()
    rows = []
    for asset in assets:
        holder = holders.get(asset.id)
        if term and not any(term in (v or '').lower() for v in (asset.serial_number, asset.model, holder)):
            continue
        row = asset.to_dict()
        row['assigned_to'] = holder
        rows.append(row)
    return rows


def asset_history(asset_id: int) -> Dict[str, Any]:
    asset = gateway.get(Asset, asset_id)
    repairs = gateway.select(Repair, {'asset_id': asset.id}, order_by=('-date', '-id'))
    assignments = gateway.select(
        Assignment, {'asset_id': asset.id}, order_by=('-issue_date', '-id'), embed=('staff',)
    )
    upgrades = gateway.select(
        AccessoryLog, {'asset_id': asset.id}, order_by=('-date', '-id'), embed=('accessory',)
    )

    history = []
    for a in assignments:
        row = a.to_dict()
        row['staff_name'] = a.staff.name if a.staff else None
        history.append(row)
    logs = []
    for log in upgrades:
        row = log.to_dict()
        if log.accessory is not None:
            row['accessory_type'] = log.accessory.type
            row['accessory_model'] = log.accessory.model
        logs.append(row)

    return {
        'asset': asset.to_dict(),
        'repairs': [r.to_dict() for r in repairs],
        'assignments': history,
        'upgrades': logs,
    }
