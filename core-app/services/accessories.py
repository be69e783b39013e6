"""
Accessory stock and the install/remove workflows.

Install and remove each touch three rows (accessory, host asset specs, audit
log) and run as one transaction.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from flask import current_app

from models.accessories import (
    Accessory, AccessoryLog, ACCESSORY_AVAILABLE, ACCESSORY_INSTALLED,
    ACTION_INSTALLED, ACTION_REMOVED,
)
from models.inventory import Asset
from services import specs
from services.gateway import gateway
from utils.errors import InvalidTransition

logger = logging.getLogger(__name__)


def _technician(name: Optional[str]) -> str:
    return name or current_app.config.get('DEFAULT_TECHNICIAN', 'Admin')


def create_accessory(**values) -> Accessory:
    status = values.pop('status', None) or ACCESSORY_AVAILABLE
    if status == ACCESSORY_INSTALLED:
        raise InvalidTransition('Accessories are installed through the install operation')
    with gateway.transaction('create accessory'):
        accessory = gateway.insert(Accessory, status=status, asset_id=None, **values)
    logger.info('Created accessory %s (%s %s)', accessory.id, accessory.type, accessory.model)
    return accessory


def update_accessory(accessory_id: int, **values) -> Accessory:
    """Edit stock details. Installed state only changes through install/remove."""
    with gateway.transaction('update accessory'):
        accessory = gateway.get(Accessory, accessory_id)
        status = values.get('status') or accessory.status
        values['status'] = status
        was_installed = accessory.status == ACCESSORY_INSTALLED
        if was_installed != (status == ACCESSORY_INSTALLED):
            raise InvalidTransition('Use install/remove to change whether an accessory is installed')
        if was_installed and (values.get('model', accessory.model) != accessory.model
                              or values.get('type', accessory.type) != accessory.type):
            raise InvalidTransition('Remove the accessory before changing its type or spec value')
        gateway.update(accessory, **values)
    return accessory


def delete_accessory(accessory_id: int) -> None:
    """Delete an accessory and its audit rows together."""
    with gateway.transaction('delete accessory'):
        accessory = gateway.get(Accessory, accessory_id)
        if accessory.status == ACCESSORY_INSTALLED:
            raise InvalidTransition('Remove the accessory from its asset before deleting it')
        removed = gateway.delete_where(AccessoryLog, {'accessory_id': accessory.id})
        gateway.delete(accessory)
    logger.info('Deleted accessory %s with %d log row(s)', accessory_id, removed)


def install_accessory(accessory_id: int, asset_id: int,
                      technician: Optional[str] = None) -> Accessory:
    with gateway.transaction('install accessory'):
        accessory = gateway.get(Accessory, accessory_id)
        asset = gateway.get(Asset, asset_id)
        if accessory.status != ACCESSORY_AVAILABLE:
            raise InvalidTransition(
                f'Accessory {accessory.id} is {accessory.status}, not {ACCESSORY_AVAILABLE}'
            )
        gateway.update(accessory, status=ACCESSORY_INSTALLED, asset_id=asset.id)
        updates = specs.install_updates(asset, accessory)
        if updates:
            gateway.update(asset, **updates)
        gateway.insert(
            AccessoryLog,
            accessory_id=accessory.id,
            asset_id=asset.id,
            action=ACTION_INSTALLED,
            date=datetime.utcnow(),
            technician=_technician(technician),
        )
    logger.info('Installed accessory %s into asset %s, spec changes %s', accessory.id, asset.id, updates)
    return accessory


def remove_accessory(accessory_id: int, asset_id: int,
                     technician: Optional[str] = None) -> Accessory:
    with gateway.transaction('remove accessory'):
        accessory = gateway.get(Accessory, accessory_id)
        asset = gateway.get(Asset, asset_id)
        if accessory.status != ACCESSORY_INSTALLED or accessory.asset_id != asset.id:
            raise InvalidTransition(f'Accessory {accessory.id} is not installed in asset {asset.id}')
        updates = specs.removal_updates(asset, accessory)
        if updates:
            gateway.update(asset, **updates)
        gateway.update(accessory, status=ACCESSORY_AVAILABLE, asset_id=None)
        gateway.insert(
            AccessoryLog,
            accessory_id=accessory.id,
            asset_id=asset.id,
            action=ACTION_REMOVED,
            date=datetime.utcnow(),
            technician=_technician(technician),
        )
    logger.info('Removed accessory %s from asset %s, spec changes %s', accessory.id, asset.id, updates)
    return accessory


def list_accessories(search: str = '') -> List[Dict[str, Any]]:
    """Accessories newest first, each with its host asset when installed."""
    rows = []
    term = (search or '').strip().lower()
    for accessory in gateway.select(Accessory, order_by=('-created_at', '-id'), embed=('asset',)):
        if term and not any(term in (v or '').lower()
                            for v in (accessory.type, accessory.brand, accessory.model,
                                      accessory.serial_number)):
            continue
        row = accessory.to_dict()
        if accessory.asset is not None:
            row['asset'] = {
                'model': accessory.asset.model,
                'serial_number': accessory.asset.serial_number,
            }
        rows.append(row)
    return rows


def asset_components(asset_id: int) -> Dict[str, Any]:
    """What is installed in an asset, what could be, and the install trail."""
    asset = gateway.get(Asset, asset_id)
    installed = gateway.select(
        Accessory, {'asset_id': asset.id, 'status': ACCESSORY_INSTALLED}, order_by=('type',)
    )
    stock = gateway.select(Accessory, {'status': ACCESSORY_AVAILABLE}, order_by=('type', 'model'))
    logs = gateway.select(
        AccessoryLog, {'asset_id': asset.id}, order_by=('-date', '-id'), embed=('accessory',)
    )
    trail = []
    for log in logs:
        row = log.to_dict()
        if log.accessory is not None:
            row['accessory_type'] = log.accessory.type
            row['accessory_model'] = log.accessory.model
        trail.append(row)
    return {
        'asset': asset.to_dict(),
        'installed': [a.to_dict() for a in installed],
        'stock': [a.to_dict() for a in stock],
        'logs': trail,
    }


def accessory_history(accessory_id: int) -> Dict[str, Any]:
    """Install/remove trail of one accessory, newest first, with the host asset."""
    accessory = gateway.get(Accessory, accessory_id)
    logs = gateway.select(
        AccessoryLog, {'accessory_id': accessory.id}, order_by=('-date', '-id'), embed=('asset',)
    )
    trail = []
    for log in logs:
        row = log.to_dict()
        row['asset'] = None
        if log.asset is not None:
            row['asset'] = {'model': log.asset.model, 'serial_number': log.asset.serial_number}
        trail.append(row)
    return {'accessory': accessory.to_dict(), 'logs': trail}
