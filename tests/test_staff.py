from datetime import date

import pytest

from services import staff as staff_service
from services.assets import issue_asset, return_asset
from utils.errors import EntityInUse


def test_list_counts_active_assignments(make_asset, make_staff):
    alice, bob = make_staff(name='Alice'), make_staff(name='Bob')
    issue_asset(make_asset().id, alice.id)
    issue_asset(make_asset().id, alice.id)

    rows = {r['name']: r for r in staff_service.list_staff()}
    assert rows['Alice']['active_assignments'] == 2
    assert rows['Bob']['active_assignments'] == 0
    assert [r['name'] for r in staff_service.list_staff(search='bo')] == ['Bob']


def test_details_split_active_and_history(app, make_asset, make_staff):
    person = make_staff()
    held, returned = make_asset(), make_asset(model='Pixel 7', type='Mobile Phone')
    issue_asset(held.id, person.id)
    issue_asset(returned.id, person.id)
    return_asset(returned.id, return_date=date(2024, 5, 1))

    details = staff_service.staff_details(person.id)
    assert [a['asset_id'] for a in details['active']] == [held.id]
    assert details['history'][0]['asset']['model'] == 'Pixel 7'


def test_history_is_limited(app, make_asset, make_staff):
    app.config['RECENT_ITEMS_LIMIT'] = 2
    person = make_staff()
    for _ in range(3):
        asset = make_asset()
        issue_asset(asset.id, person.id)
        return_asset(asset.id)
    assert len(staff_service.staff_details(person.id)['history']) == 2


def test_delete_staff_with_history_is_refused(make_asset, make_staff):
    person = make_staff()
    issue_asset(make_asset().id, person.id)
    with pytest.raises(EntityInUse):
        staff_service.delete_staff(person.id)
