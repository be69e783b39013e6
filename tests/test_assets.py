"""
Asset lifecycle: issue, return, status edits, repairs and deletes.
"""
from datetime import date

import pytest

from models.inventory import Assignment
from services import assets as asset_service
from utils.errors import EntityInUse, EntityNotFound, InvalidTransition
from services.repairs import create_repair, list_repairs


def test_issue_sets_issued_and_opens_assignment(make_asset, make_staff, issued_iff_open):
    asset, staff = make_asset(), make_staff()
    assignment = asset_service.issue_asset(asset.id, staff.id, issue_date=date(2024, 3, 1))

    assert asset_service.get_asset(asset.id).status == 'Issued'
    assert assignment.return_date is None
    assert assignment.issue_date == date(2024, 3, 1)
    assert issued_iff_open(asset.id)


def test_issue_twice_is_refused(make_asset, make_staff, issued_iff_open):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff().id)
    with pytest.raises(InvalidTransition):
        asset_service.issue_asset(asset.id, make_staff().id)
    assert Assignment.query.filter_by(asset_id=asset.id).count() == 1
    assert issued_iff_open(asset.id)


def test_issue_scrapped_asset_is_refused(make_asset, make_staff):
    asset = make_asset(status='Scrap')
    with pytest.raises(InvalidTransition):
        asset_service.issue_asset(asset.id, make_staff().id)


def test_issue_unknown_staff(make_asset):
    asset = make_asset()
    with pytest.raises(EntityNotFound):
        asset_service.issue_asset(asset.id, 999)
    assert asset_service.get_asset(asset.id).status == 'Available'


def test_return_closes_assignment(make_asset, make_staff, issued_iff_open):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff().id)
    returned, assignment = asset_service.return_asset(asset.id, return_date=date(2024, 4, 1))

    assert returned.status == 'Available'
    assert assignment.return_date == date(2024, 4, 1)
    assert issued_iff_open(asset.id)


def test_return_without_assignment_still_sets_available(make_asset):
    asset = make_asset(status='Repair')
    returned, assignment = asset_service.return_asset(asset.id)
    assert returned.status == 'Available'
    assert assignment is None


def test_return_with_foreign_assignment(make_asset, make_staff, make_assignment):
    asset, other = make_asset(), make_asset()
    assignment = make_assignment(other, make_staff())
    with pytest.raises(InvalidTransition):
        asset_service.return_asset(asset.id, assignment_id=assignment.id)


def test_edit_to_available_closes_open_assignment(make_asset, make_staff, issued_iff_open):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff().id)
    asset_service.update_asset(asset.id, status='Available')

    assert Assignment.query.filter_by(asset_id=asset.id, return_date=None).count() == 0
    assert issued_iff_open(asset.id)


def test_edit_to_scrap_closes_every_open_assignment(make_asset, make_staff, make_assignment):
    asset = make_asset(status='Issued')
    make_assignment(asset, make_staff())
    make_assignment(asset, make_staff(), issue_date=date(2024, 2, 1))
    asset_service.update_asset(asset.id, status='Scrap')
    assert Assignment.query.filter_by(asset_id=asset.id, return_date=None).count() == 0


def test_edit_into_issued_is_refused(make_asset):
    asset = make_asset()
    with pytest.raises(InvalidTransition):
        asset_service.update_asset(asset.id, status='Issued')
    assert asset_service.get_asset(asset.id).status == 'Available'


def test_edit_other_fields_keeps_issued(make_asset, make_staff, issued_iff_open):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff().id)
    updated = asset_service.update_asset(asset.id, specs_ram='16GB')
    assert updated.status == 'Issued'
    assert issued_iff_open(asset.id)


def test_create_as_issued_is_refused(app):
    with pytest.raises(InvalidTransition):
        asset_service.create_asset(serial_number='X1', model='M', type='Laptop', status='Issued')


@pytest.mark.parametrize('prior', ['Available', 'Issued', 'Repair', 'Scrap'])
def test_repair_forces_repair_status(make_asset, make_staff, prior):
    asset = make_asset(status='Available' if prior == 'Issued' else prior)
    if prior == 'Issued':
        asset_service.issue_asset(asset.id, make_staff().id)
    repair = create_repair(asset.id, 'Broken hinge', parts_replaced='Hinge', cost=40)

    assert asset_service.get_asset(asset.id).status == 'Repair'
    assert repair.parts_replaced == 'Hinge'
    # the holder keeps the asset while it is in repair
    held = asset_service.current_assignment(asset.id)
    assert (held is not None) == (prior == 'Issued')


def test_reissue_after_repair_to_same_holder(make_asset, make_staff, issued_iff_open):
    asset, staff = make_asset(), make_staff()
    first = asset_service.issue_asset(asset.id, staff.id)
    create_repair(asset.id, 'Keyboard spill')

    again = asset_service.issue_asset(asset.id, staff.id)
    assert again.id == first.id
    assert asset_service.get_asset(asset.id).status == 'Issued'
    assert Assignment.query.filter_by(asset_id=asset.id).count() == 1
    assert issued_iff_open(asset.id)


def test_reissue_after_repair_to_someone_else_is_refused(make_asset, make_staff):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff().id)
    create_repair(asset.id, 'Keyboard spill')
    with pytest.raises(InvalidTransition):
        asset_service.issue_asset(asset.id, make_staff().id)
    assert asset_service.get_asset(asset.id).status == 'Repair'


def test_create_asset_with_model(app):
    asset = asset_service.create_asset(serial_number='M-1', model='EliteBook 840', type='Laptop')
    assert asset_service.get_asset(asset.id).model == 'EliteBook 840'
    assert asset.status == 'Available'


def test_repair_notes_cannibalized_source(make_asset):
    target = make_asset()
    donor = make_asset(model='ThinkPad T14', serial_number='DONOR1')
    repair = create_repair(target.id, 'Dead screen', parts_replaced='Screen',
                           cannibalized_from_id=donor.id)
    assert repair.parts_replaced == 'Screen (Taken from ThinkPad T14 #DONOR1)'


def test_list_repairs_newest_first(make_asset):
    asset = make_asset(model='Latitude')
    create_repair(asset.id, 'old', repair_date=date(2023, 1, 1))
    create_repair(asset.id, 'new', repair_date=date(2024, 1, 1))
    rows = list_repairs()
    assert [r['fault_description'] for r in rows] == ['new', 'old']
    assert rows[0]['asset_model'] == 'Latitude'


def test_delete_with_history_is_refused(make_asset, make_staff):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff().id)
    with pytest.raises(EntityInUse):
        asset_service.delete_asset(asset.id)


def test_delete_unused_asset(make_asset):
    asset = make_asset()
    asset_service.delete_asset(asset.id)
    with pytest.raises(EntityNotFound):
        asset_service.get_asset(asset.id)


def test_list_assets_shows_holder(make_asset, make_staff):
    held, free = make_asset(), make_asset()
    asset_service.issue_asset(held.id, make_staff(name='Dana').id)
    rows = {r['id']: r for r in asset_service.list_assets()}
    assert rows[held.id]['assigned_to'] == 'Dana'
    assert rows[free.id]['assigned_to'] is None
    assert [r['id'] for r in asset_service.list_assets(search='dana')] == [held.id]


def test_history_collects_everything(make_asset, make_staff):
    asset = make_asset()
    asset_service.issue_asset(asset.id, make_staff(name='Ravi').id)
    create_repair(asset.id, 'Fan noise')
    history = asset_service.asset_history(asset.id)
    assert history['assignments'][0]['staff_name'] == 'Ravi'
    assert history['repairs'][0]['fault_description'] == 'Fan noise'
    assert history['upgrades'] == []
