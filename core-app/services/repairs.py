"""
Asset repair log.

Logging a repair always puts the asset into Repair status, whatever it was.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from models.inventory import Asset, Repair, STATUS_REPAIR
from services.gateway import gateway

logger = logging.getLogger(__name__)


def cannibalization_note(source: Asset) -> str:
    return f' (Taken from {source.model} #{source.serial_number})'


def create_repair(asset_id: int, fault_description: str, parts_replaced: str = '',
                  cost: Optional[Decimal] = None, repair_date: Optional[date] = None,
                  technician: Optional[str] = None,
                  cannibalized_from_id: Optional[int] = None) -> Repair:
    """
    Record a repair and force the asset to Repair.

    When parts came out of another asset, a note naming it is appended to
    ``parts_replaced``.
    """
    with gateway.transaction('create repair'):
        asset = gateway.get(Asset, asset_id)
        parts = parts_replaced or ''
        if cannibalized_from_id:
            source = gateway.get(Asset, cannibalized_from_id)
            parts = f'{parts}{cannibalization_note(source)}'
        repair = gateway.insert(
            Repair,
            asset_id=asset.id,
            fault_description=fault_description,
            parts_replaced=parts,
            cost=cost if cost is not None else 0,
            date=repair_date or date.today(),
            technician=technician,
        )
        gateway.update(asset, status=STATUS_REPAIR)
    logger.info('Logged repair %s on asset %s', repair.id, asset.id)
    return repair


def list_repairs(limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Repairs newest first, with the model of the repaired asset."""
    rows = []
    for repair in gateway.select(Repair, order_by=('-date', '-id'), limit=limit, embed=('asset',)):
        row = repair.to_dict()
        row['asset_model'] = repair.asset.model if repair.asset else None
        rows.append(row)
    return rows
