"""
Tests for spec-string parsing and aggregation.
"""
from types import SimpleNamespace

from services.specs import (
    Label, Quantity, add_ram, add_storage, install_updates, parse_spec,
    remove_segment, remove_storage, removal_updates, subtract_ram,
)


def test_parse_quantity():
    assert parse_spec('16GB') == Quantity(16)
    assert parse_spec('8 gb DDR4') == Quantity(8)


def test_parse_label():
    assert parse_spec('512 TB') == Label('512 TB')
    assert parse_spec('DDR4 kit') == Label('DDR4 kit')
    assert parse_spec('') == Label('')
    assert parse_spec(None) == Label('')


def test_zero_quantity_is_a_label():
    assert parse_spec('0GB') == Label('0GB')


def test_add_ram_sums_quantities():
    assert add_ram('', '16GB') == '16GB'
    assert add_ram('16GB', '8GB') == '24GB'


def test_add_ram_appends_labels():
    assert add_ram('Onboard', '8GB') == 'Onboard + 8GB'
    assert add_ram('8GB', 'Kingston stick') == '8GB + Kingston stick'


def test_subtract_ram():
    assert subtract_ram('24GB', '8GB') == '16GB'
    assert subtract_ram('8GB', '8GB') == ''
    assert subtract_ram('4GB', '8GB') == ''


def test_subtract_ram_label_restores_text():
    installed = add_ram('Onboard', 'Kingston stick')
    assert subtract_ram(installed, 'Kingston stick') == 'Onboard'


def test_subtract_ram_missing_value_keeps_text():
    assert subtract_ram('Onboard', 'Kingston stick') == 'Onboard'


def test_remove_segment_substring_fallback():
    # Hand-edited text where the value is not a whole segment
    assert remove_segment('256GB SSD+ 1TB HDD', '1TB HDD') == '256GB SSD+'
    assert remove_segment('A + B + C', 'B') == 'A + C'
    assert remove_segment('A + B', 'Z') is None


def test_add_storage_fills_primary_then_secondary():
    assert add_storage('', '', '256GB SSD') == {'specs_storage': '256GB SSD'}
    assert add_storage('256GB SSD', '', '1TB HDD') == {'specs_storage_2': '1TB HDD'}
    assert add_storage('256GB SSD', '1TB HDD', '2TB HDD') == {'specs_storage_2': '1TB HDD + 2TB HDD'}


def test_remove_storage_checks_primary_first():
    assert remove_storage('256GB SSD', '1TB HDD', '256GB SSD') == {'specs_storage': ''}
    assert remove_storage('256GB SSD', '1TB HDD + 2TB HDD', '2TB HDD') == {'specs_storage_2': '1TB HDD'}
    assert remove_storage('256GB SSD', '', 'missing') == {}


def test_updates_by_accessory_type():
    asset = SimpleNamespace(specs_ram='8GB', specs_storage='', specs_storage_2='')
    assert install_updates(asset, SimpleNamespace(type='RAM', model='8GB')) == {'specs_ram': '16GB'}
    assert install_updates(asset, SimpleNamespace(type='Othe Storage', model='1TB')) == {'specs_storage': '1TB'}
    assert install_updates(asset, SimpleNamespace(type='Mouse', model='MX')) == {}
    assert removal_updates(asset, SimpleNamespace(type='RAM', model='8GB')) == {'specs_ram': ''}
