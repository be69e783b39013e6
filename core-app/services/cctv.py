"""
CCTV inventory: camera records, repair trail, the replacement workflow and the
premise/floor board used to browse cameras.

``build_camera_board`` is pure: the selected premise and floor ordering are
passed in rather than read from shared state.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from flask import current_app

from models.cctv import (
    CCTVCamera, CCTVRepair, Floor, Premise, CAMERA_DAMAGED, CAMERA_FAULTY,
    CAMERA_IN_STOCK, CAMERA_WORKING, REMOVED_SUFFIX, RETIRED_STATUSES,
    UNASSIGNED_FLOOR,
)
from services.gateway import gateway
from utils.errors import EntityInUse, InvalidTransition, ValidationError

logger = logging.getLogger(__name__)

EPOCH = date(1970, 1, 1)
SORT_MODES = (
    'location', 'model', 'serial', 'status-working', 'status-faulty',
    'date-newest', 'date-oldest',
)


def default_premise() -> str:
    return current_app.config.get('DEFAULT_PREMISE', 'Main Premise')


# -- cameras -------------------------------------------------------------------

def list_cameras() -> List[CCTVCamera]:
    return gateway.select(CCTVCamera, order_by=('camera_location', 'id'))


def stock_cameras() -> List[CCTVCamera]:
    """Cameras that can stand in for a failed one."""
    return gateway.select(CCTVCamera, {'status': CAMERA_IN_STOCK}, order_by=('model', 'id'))


def create_camera(**values) -> CCTVCamera:
    with gateway.transaction('create camera'):
        camera = gateway.insert(CCTVCamera, **values)
    logger.info('Created camera %s at %s', camera.id, camera.camera_location)
    return camera


def update_camera(camera_id: int, **values) -> CCTVCamera:
    with gateway.transaction('update camera'):
        camera = gateway.get(CCTVCamera, camera_id)
        gateway.update(camera, **values)
    return camera


def set_camera_status(camera_id: int, status: str) -> CCTVCamera:
    with gateway.transaction('set camera status'):
        camera = gateway.get(CCTVCamera, camera_id)
        gateway.update(camera, status=status)
    logger.info('Camera %s marked as %s', camera.id, status)
    return camera


def delete_camera(camera_id: int) -> None:
    with gateway.transaction('delete camera'):
        camera = gateway.get(CCTVCamera, camera_id)
        if gateway.count(CCTVRepair, {'cctv_id': camera.id}):
            raise EntityInUse(f'Camera {camera.id} has repair history and cannot be deleted')
        gateway.delete(camera)
    logger.info('Deleted camera %s', camera_id)


def log_camera_repair(camera_id: int, fault_description: str, action_taken: str = '',
                      cost=None, repair_date: Optional[date] = None,
                      technician: Optional[str] = None) -> CCTVRepair:
    with gateway.transaction('log camera repair'):
        camera = gateway.get(CCTVCamera, camera_id)
        repair = gateway.insert(
            CCTVRepair,
            cctv_id=camera.id,
            fault_description=fault_description,
            action_taken=action_taken,
            cost=cost if cost is not None else 0,
            date=repair_date or date.today(),
            technician=technician,
        )
    return repair


def camera_history(camera_id: int) -> Dict[str, Any]:
    camera = gateway.get(CCTVCamera, camera_id)
    repairs = gateway.select(CCTVRepair, {'cctv_id': camera.id}, order_by=('-date', '-id'))
    return {'camera': camera.to_dict(), 'repairs': [r.to_dict() for r in repairs]}


def replace_camera(old_id: int, new_id: int, old_status: str,
                   replace_date: Optional[date] = None,
                   technician: Optional[str] = None) -> Dict[str, CCTVCamera]:
    """
    Swap a failed camera for one from stock.

    The old camera keeps its record: it is retired with ``old_status``, its
    location gets a " (Removed)" suffix and it leaves its floor. The stock
    camera takes over the old location. Both get a trail entry.
    """
    if old_status not in RETIRED_STATUSES:
        raise ValidationError(f'Replaced cameras must be {" or ".join(RETIRED_STATUSES)}')
    if old_id == new_id:
        raise InvalidTransition('A camera cannot replace itself')
    when = replace_date or date.today()

    with gateway.transaction('replace camera'):
        old = gateway.get(CCTVCamera, old_id)
        new = gateway.get(CCTVCamera, new_id)
        if new.status != CAMERA_IN_STOCK:
            raise InvalidTransition(f'Camera {new.id} is {new.status}, not {CAMERA_IN_STOCK}')

        location, floor, premise = old.camera_location or '', old.floor, old.premise
        gateway.update(
            old,
            status=old_status,
            camera_location=f'{location}{REMOVED_SUFFIX}',
            floor=UNASSIGNED_FLOOR,
        )
        gateway.update(
            new,
            status=CAMERA_WORKING,
            camera_location=location,
            floor=floor,
            premise=premise,
            install_date=when,
        )
        gateway.insert(
            CCTVRepair,
            cctv_id=old.id,
            fault_description='Replaced',
            action_taken=f'Replaced by {new.model} (SN: {new.serial_number})',
            date=when,
            technician=technician,
        )
        gateway.insert(
            CCTVRepair,
            cctv_id=new.id,
            fault_description='Installation',
            action_taken=f'Installed to replace {old.model} (SN: {old.serial_number})',
            date=when,
            technician=technician,
        )
    logger.info('Camera %s replaced by %s at %s', old.id, new.id, location)
    return {'old': old, 'new': new}


# -- premises and floors ---------------------------------------------------------

def list_premises() -> List[Premise]:
    return gateway.select(Premise, order_by=('sort_order', 'name'))


def create_premise(name: str, sort_order: int = 0) -> Premise:
    with gateway.transaction('create premise'):
        return gateway.insert(Premise, name=name, sort_order=sort_order)


def delete_premise(premise_id: int) -> None:
    with gateway.transaction('delete premise'):
        gateway.delete(gateway.get(Premise, premise_id))


def list_floors() -> List[Floor]:
    return gateway.select(Floor, order_by=('sort_order', 'name'))


def create_floor(name: str, sort_order: int = 0) -> Floor:
    with gateway.transaction('create floor'):
        return gateway.insert(Floor, name=name, sort_order=sort_order)


def delete_floor(floor_id: int) -> None:
    with gateway.transaction('delete floor'):
        gateway.delete(gateway.get(Floor, floor_id))


# -- board -------------------------------------------------------------------------

@dataclass
class FloorGroup:
    name: str
    cameras: List[Any] = field(default_factory=list)


@dataclass
class CameraBoard:
    premise: str
    premises: List[str]
    stock: List[Any]
    scrap: List[Any]
    floors: List[FloorGroup]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'premise': self.premise,
            'premises': self.premises,
            'stock': [c.to_dict() for c in self.stock],
            'scrap': [c.to_dict() for c in self.scrap],
            'floors': [
                {'name': g.name, 'cameras': [c.to_dict() for c in g.cameras]}
                for g in self.floors
            ],
        }


def _text(value: Optional[str]) -> str:
    return (value or '').casefold()


def _installed_on(camera) -> date:
    return camera.install_date or EPOCH


_SORT_KEYS: Dict[str, Callable] = {
    'location': lambda c: _text(c.camera_location),
    'model': lambda c: _text(c.model),
    'serial': lambda c: _text(c.serial_number),
    'status-working': lambda c: c.status != CAMERA_WORKING,
    'status-faulty': lambda c: c.status != CAMERA_FAULTY,
    'date-oldest': _installed_on,
}


def sort_cameras(cameras: Iterable[Any], mode: str) -> List[Any]:
    """Order cameras within a floor; unknown modes keep the input order."""
    if mode == 'date-newest':
        return sorted(cameras, key=_installed_on, reverse=True)
    key = _SORT_KEYS.get(mode)
    return sorted(cameras, key=key) if key else list(cameras)


def order_floors(names: Iterable[str], floor_order: Mapping[str, int]) -> List[str]:
    """Known floors by sort order, unknown floors after them, ties alphabetical."""
    return sorted(
        names,
        key=lambda n: (n not in floor_order, floor_order.get(n, 0), n.casefold(), n),
    )


def matches_search(camera, term: str) -> bool:
    term = (term or '').strip().casefold()
    if not term:
        return True
    fields = (camera.camera_location, camera.model, camera.serial_number, camera.status, camera.floor)
    return any(term in _text(v) for v in fields)


def resolve_premise(requested: Optional[str], premise_names: List[str], fallback: str) -> str:
    if requested:
        return requested
    return premise_names[0] if premise_names else fallback


def build_camera_board(cameras: Iterable[Any], premise: str, floor_order: Mapping[str, int],
                       sort_mode: str = 'location', search: str = '',
                       premise_names: Optional[List[str]] = None,
                       fallback_premise: str = 'Main Premise') -> CameraBoard:
    """
    Partition cameras into stock, scrap and the active cameras of one premise,
    the latter grouped by floor.

    Search narrows every partition. A camera without a premise counts as
    ``fallback_premise``; one without a floor is grouped under "Unassigned".
    """
    visible = [c for c in cameras if matches_search(c, search)]
    stock = [c for c in visible if c.status == CAMERA_IN_STOCK]
    scrap = [c for c in visible if c.status == CAMERA_DAMAGED]
    active = [
        c for c in visible
        if c.status not in (CAMERA_IN_STOCK, CAMERA_DAMAGED)
        and (c.premise or fallback_premise) == premise
    ]

    groups: Dict[str, List[Any]] = {}
    for camera in active:
        groups.setdefault(camera.floor or UNASSIGNED_FLOOR, []).append(camera)

    floors = [
        FloorGroup(name, sort_cameras(groups[name], sort_mode))
        for name in order_floors(groups, floor_order)
    ]
    return CameraBoard(
        premise=premise,
        premises=list(premise_names) if premise_names else [fallback_premise],
        stock=stock,
        scrap=scrap,
        floors=floors,
    )


def camera_board(premise: Optional[str] = None, sort_mode: str = 'location',
                 search: str = '') -> CameraBoard:
    """Load cameras and lookups, then build the board for ``premise``."""
    if sort_mode not in SORT_MODES:
        raise ValidationError(f'Unknown sort mode {sort_mode!r}')
    fallback = default_premise()
    premise_names = [p.name for p in list_premises()]
    floor_order = {f.name: f.sort_order for f in list_floors()}
    selected = resolve_premise(premise, premise_names, fallback)
    return build_camera_board(
        list_cameras(), selected, floor_order, sort_mode, search,
        premise_names=premise_names, fallback_premise=fallback,
    )
