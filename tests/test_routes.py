"""
HTTP API smoke tests: forms, status codes and JSON error bodies.
"""


def test_index_and_health(client):
    assert client.get('/').get_json() == {'name': 'AssetDesk', 'version': '1.0.0'}
    assert client.get('/health').get_json() == {'status': 'healthy'}


def test_create_asset_form_encoded(client):
    response = client.post('/api/assets/', data={
        'serial_number': 'ABC123',
        'model': 'EliteBook 840',
        'type': 'Laptop',
        'specs_ram': '8GB',
    })
    assert response.status_code == 201
    body = response.get_json()
    assert body['status'] == 'Available'
    assert body['specs_ram'] == '8GB'


def test_create_asset_validation_errors(client):
    response = client.post('/api/assets/', data={'model': 'X', 'type': 'Toaster'})
    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'Invalid input'
    assert 'serial_number' in body['fields']
    assert 'type' in body['fields']


def test_issue_and_return_flow(client, make_asset, make_staff):
    asset, staff = make_asset(), make_staff(name='Noor')

    response = client.post(f'/api/assets/{asset.id}/issue', json={'staff_id': staff.id})
    assert response.status_code == 201
    holder = client.get(f'/api/assets/{asset.id}/holder').get_json()
    assert holder['staff']['name'] == 'Noor'

    again = client.post(f'/api/assets/{asset.id}/issue', json={'staff_id': staff.id})
    assert again.status_code == 409
    assert 'already issued' in again.get_json()['error']

    returned = client.post(f'/api/assets/{asset.id}/return', data={'return_date': '2024-07-01'})
    assert returned.status_code == 200
    assert returned.get_json()['assignment']['return_date'] == '2024-07-01'
    assert client.get(f'/api/assets/{asset.id}').get_json()['status'] == 'Available'


def test_partial_update(client, make_asset):
    asset = make_asset(model='Old')
    response = client.put(f'/api/assets/{asset.id}', json={'specs_os': 'Windows 11'})
    body = response.get_json()
    assert body['specs_os'] == 'Windows 11'
    assert body['model'] == 'Old'


def test_not_found_is_json(client):
    response = client.get('/api/assets/999')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Asset 999 not found'}


def test_delete_in_use_is_conflict(client, make_asset, make_staff):
    asset = make_asset()
    client.post(f'/api/assets/{asset.id}/issue', data={'staff_id': make_staff().id})
    assert client.delete(f'/api/assets/{asset.id}').status_code == 409


def test_repair_route(client, make_asset):
    asset = make_asset()
    response = client.post('/api/repairs/', data={
        'asset_id': asset.id,
        'fault_description': 'Keyboard dead',
        'cost': '25.50',
        'date': '2024-02-02',
    })
    assert response.status_code == 201
    assert response.get_json()['cost'] == 25.5
    assert client.get(f'/api/assets/{asset.id}').get_json()['status'] == 'Repair'


def test_staff_routes(client, make_staff):
    response = client.post('/api/staff/', data={'employee_id': 'E77', 'name': 'Jo'})
    assert response.status_code == 201
    staff_id = response.get_json()['id']
    assert client.get(f'/api/staff/{staff_id}').get_json()['active'] == []
    assert client.delete(f'/api/staff/{staff_id}').status_code == 200


def test_accessory_install_route(client, make_asset):
    asset = make_asset(specs_ram='8GB')
    created = client.post('/api/accessories/', data={'type': 'RAM', 'model': '8GB'})
    assert created.status_code == 201
    accessory_id = created.get_json()['id']

    installed = client.post(f'/api/accessories/{accessory_id}/install', data={'asset_id': asset.id})
    assert installed.get_json()['asset']['specs_ram'] == '16GB'
    removed = client.post(f'/api/accessories/{accessory_id}/remove', data={'asset_id': asset.id})
    assert removed.get_json()['asset']['specs_ram'] == '8GB'

    components = client.get(f'/api/accessories/assets/{asset.id}').get_json()
    assert [log['action'] for log in components['logs']] == ['Removed', 'Installed']


def test_cctv_replace_route(client, make_camera):
    old = make_camera(camera_location='Gate', floor='Ground')
    new = make_camera(status='In Stock')
    response = client.post(f'/api/cctv/{old.id}/replace', data={
        'new_camera_id': new.id,
        'old_status': 'Faulty',
        'replace_date': '2024-03-03',
    })
    assert response.status_code == 200
    assert response.get_json()['new']['camera_location'] == 'Gate'

    board = client.get('/api/cctv/board').get_json()
    assert board['premise'] == 'Main Premise'
    # the retired Faulty camera stays on the board, off its floor
    assert [g['name'] for g in board['floors']] == ['Ground', 'Unassigned']


def test_cctv_lookups(client):
    assert client.post('/api/cctv/floors', data={'name': 'Basement', 'sort_order': 0}).status_code == 201
    assert client.post('/api/cctv/floors', data={'name': 'Basement'}).status_code == 400
    assert [f['name'] for f in client.get('/api/cctv/floors').get_json()] == ['Basement']


def test_dashboard(client, make_asset, make_camera):
    make_asset(type='Laptop')
    make_asset(type='Mobile Phone', status='Repair')
    make_camera(status='Faulty')
    summary = client.get('/api/dashboard/').get_json()
    assert summary['total_assets'] == 2
    assert summary['by_type']['Mobile Phone']['repair'] == 1
    assert summary['faulty_cameras'] == 1


def test_accessory_history_route(client, make_asset, make_accessory):
    asset = make_asset(serial_number='HIST-1')
    stick = make_accessory()
    client.post(f'/api/accessories/{stick.id}/install', data={'asset_id': asset.id})

    body = client.get(f'/api/accessories/{stick.id}/history').get_json()
    assert [log['action'] for log in body['logs']] == ['Installed']
    assert body['logs'][0]['asset']['serial_number'] == 'HIST-1'
    assert client.get('/api/accessories/9999/history').status_code == 404
