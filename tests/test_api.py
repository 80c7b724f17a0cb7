"""Tests for the game HTTP endpoints."""
import json

from neon_grid.models import SaveSlot, db


class TestReadEndpoints:
    def test_state(self, client):
        response = client.get('/api/game/state')

        assert response.status_code == 200
        state = response.get_json()['game_state']
        assert state['resources'] == {'ENERGY': 0, 'DATA': 0, 'MATS': 0, 'CREDITS': 0}
        assert state['visible_buildings'] == ['SOLAR_FARM']
        assert state['logs'][0]['message'] == "SYSTEM: New session initialized."
        assert state['analyzing'] is False

    def test_buildings(self, client):
        response = client.get('/api/game/buildings')

        buildings = response.get_json()['buildings']
        assert [b['id'] for b in buildings] == [
            'SOLAR_FARM', 'DATA_MINER', 'SYNTH_FACTORY', 'MAINFRAME', 'QUANTUM_RIG',
        ]
        assert buildings[0]['base_cost'] == [{'resource': 'DATA', 'amount': 10}]

    def test_unknown_route(self, client):
        response = client.get('/api/game/nowhere')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Not found'}


class TestActions:
    def test_gather_then_build(self, client):
        for _ in range(10):
            client.post('/api/game/gather')

        response = client.post('/api/game/upgrade/SOLAR_FARM')

        body = response.get_json()
        assert response.status_code == 200
        assert body['success'] is True
        assert body['game_state']['buildings']['SOLAR_FARM'] == {'level': 1, 'active': True}
        assert body['game_state']['resources']['DATA'] == 0
        assert body['game_state']['rates']['ENERGY'] == 5

    def test_declined_upgrade(self, client):
        response = client.post('/api/game/upgrade/DATA_MINER')

        body = response.get_json()
        assert response.status_code == 200
        assert body['success'] is False
        assert body['game_state']['logs'][0]['type'] == 'alert'

    def test_unknown_building(self, client):
        response = client.post('/api/game/upgrade/SPACE_ELEVATOR')
        assert response.status_code == 404
        assert response.get_json() == {'error': "Unknown building: SPACE_ELEVATOR"}

    def test_toggle(self, client, controller):
        controller.engine.buildings['SOLAR_FARM'].level = 1

        response = client.post('/api/game/toggle/SOLAR_FARM')

        body = response.get_json()
        assert body['active'] is False
        assert body['game_state']['rates']['ENERGY'] == 0

    def test_save_and_reset(self, app, client):
        client.post('/api/game/gather')
        assert client.post('/api/game/save').get_json()['success'] is True

        with app.app_context():
            slot = db.session.get(SaveSlot, app.config['SAVE_KEY'])
            assert json.loads(slot.payload)['resources']['ENERGY'] == 10

        body = client.post('/api/game/reset').get_json()

        assert body['game_state']['resources']['ENERGY'] == 0
        with app.app_context():
            assert db.session.get(SaveSlot, app.config['SAVE_KEY']) is None

    def test_dismiss_offline_gains(self, client, controller):
        controller.engine.offline_gains = {'ENERGY': 50}

        body = client.post('/api/game/offline/dismiss').get_json()

        assert body['game_state']['offline_gains'] is None

    def test_analyze(self, client, controller):
        response = client.post('/api/game/analyze')
        controller.wait_for_analysis(5)

        assert response.status_code == 202
        messages = [entry.message for entry in controller.engine.logs]
        assert messages[0] == "SYSTEM: AI Module Offline. (Missing API Key)"
        assert "SYSTEM: Initializing AI Diagnostic..." in messages
