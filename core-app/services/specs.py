"""
Spec-string aggregation for accessory install/remove.

An asset's RAM and storage fields are free text. A value is parsed into either
a ``Quantity`` (an integer amount of GB) or an opaque ``Label``. Two quantities
are summed or subtracted; anything else is handled as a list of ``" + "``
separated segments, so removing what was installed restores the original text.

Hand-edited strings are patched best-effort: if the removed value is no longer
a whole segment, the first substring occurrence (with an adjacent separator) is
cut instead.
"""
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from models.accessories import STORAGE_TYPES, TYPE_RAM

SEPARATOR = ' + '
UNIT_GB = 'GB'

_INTEGER = re.compile(r'\d+')


@dataclass(frozen=True)
class Quantity:
    amount: int
    unit: str = UNIT_GB

    def __str__(self) -> str:
        return f'{self.amount}{self.unit}'


@dataclass(frozen=True)
class Label:
    text: str

    def __str__(self) -> str:
        return self.text


SpecValue = Union[Quantity, Label]


def parse_spec(text: Optional[str]) -> SpecValue:
    """Parse ``"16GB"``-like text into a Quantity; never raises."""
    text = (text or '').strip()
    match = _INTEGER.search(text)
    if match and UNIT_GB in text.upper():
        amount = int(match.group())
        if amount > 0:
            return Quantity(amount)
    return Label(text)


def split_segments(text: Optional[str]) -> List[str]:
    return [part.strip() for part in (text or '').split(SEPARATOR) if part.strip()]


def append_segment(current: Optional[str], value: str) -> str:
    current = (current or '').strip()
    return f'{current}{SEPARATOR}{value}' if current else value


def remove_segment(current: Optional[str], value: str) -> Optional[str]:
    """
    Remove ``value`` from a segmented string.

    Returns the new text, or None when ``value`` does not occur at all.
    """
    current = current or ''
    value = (value or '').strip()
    if not value or value not in current:
        return None

    parts = split_segments(current)
    if value in parts:
        parts.remove(value)
        return SEPARATOR.join(parts)

    for pattern in (SEPARATOR + value, value + SEPARATOR, value):
        if pattern in current:
            return current.replace(pattern, '', 1).strip()
    return None


def add_ram(current: Optional[str], value: str) -> str:
    held, added = parse_spec(current), parse_spec(value)
    if isinstance(held, Quantity) and isinstance(added, Quantity):
        return str(Quantity(held.amount + added.amount))
    return append_segment(current, value)


def subtract_ram(current: Optional[str], value: str) -> str:
    held, removed = parse_spec(current), parse_spec(value)
    if isinstance(held, Quantity) and isinstance(removed, Quantity):
        remaining = held.amount - removed.amount
        return str(Quantity(remaining)) if remaining > 0 else ''
    result = remove_segment(current, value)
    return result if result is not None else (current or '').strip()


def add_storage(primary: Optional[str], secondary: Optional[str], value: str) -> Dict[str, str]:
    if not primary:
        return {'specs_storage': value}
    if not secondary:
        return {'specs_storage_2': value}
    return {'specs_storage_2': append_segment(secondary, value)}


def remove_storage(primary: Optional[str], secondary: Optional[str], value: str) -> Dict[str, str]:
    for field, current in (('specs_storage', primary), ('specs_storage_2', secondary)):
        result = remove_segment(current, value)
        if result is not None:
            return {field: result}
    return {}


def install_updates(asset, accessory) -> Dict[str, str]:
    """Asset field changes caused by installing ``accessory``."""
    if accessory.type == TYPE_RAM:
        return {'specs_ram': add_ram(asset.specs_ram, accessory.model)}
    if accessory.type in STORAGE_TYPES:
        return add_storage(asset.specs_storage, asset.specs_storage_2, accessory.model)
    return {}


def removal_updates(asset, accessory) -> Dict[str, str]:
    """Asset field changes caused by removing ``accessory``."""
    if accessory.type == TYPE_RAM:
        return {'specs_ram': subtract_ram(asset.specs_ram, accessory.model)}
    if accessory.type in STORAGE_TYPES:
        return remove_storage(asset.specs_storage, asset.specs_storage_2, accessory.model)
    return {}
