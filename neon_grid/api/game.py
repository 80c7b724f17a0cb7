"""Game API endpoints."""
from flask import Blueprint, current_app, jsonify
from neon_grid.game_data_loader import UnknownBuildingError

game_bp = Blueprint('game', __name__)

def get_controller():
    """Get the game controller attached to the running app."""
    return current_app.extensions['neon_grid']

@game_bp.errorhandler(UnknownBuildingError)
def unknown_building(error):
    return jsonify({'error': f"Unknown building: {error.args[0]}"}), 404

@game_bp.route('/state', methods=['GET'])
def get_game_state():
    """Get current game state for rendering."""
    return jsonify({'game_state': get_controller().get_state()})

@game_bp.route('/buildings', methods=['GET'])
def get_buildings():
    """Get the building catalog."""
    return jsonify({'buildings': get_controller().get_catalog()})

@game_bp.route('/gather', methods=['POST'])
def manual_gather():
    """Grant the manual gather bundle."""
    controller = get_controller()
    controller.manual_gather()
    return jsonify({'success': True, 'game_state': controller.get_state()})

@game_bp.route('/upgrade/<building_id>', methods=['POST'])
def upgrade_building(building_id):
    """Construct or upgrade a building.

    Insufficient resources is a declined action, not an error: the response
    is still 200 with ``success`` set to false.
    """
    controller = get_controller()
    success = controller.upgrade_building(building_id)
    return jsonify({'success': success, 'game_state': controller.get_state()})

@game_bp.route('/toggle/<building_id>', methods=['POST'])
def toggle_building(building_id):
    """Flip a building's power switch."""
    controller = get_controller()
    active = controller.toggle_building(building_id)
    return jsonify({'success': True, 'active': active, 'game_state': controller.get_state()})

@game_bp.route('/offline/dismiss', methods=['POST'])
def dismiss_offline_gains():
    """Dismiss the offline gains notice."""
    controller = get_controller()
    controller.dismiss_offline_gains()
    return jsonify({'success': True, 'game_state': controller.get_state()})

@game_bp.route('/save', methods=['POST'])
def save_game():
    """Save game state immediately instead of waiting for the autosave."""
    controller = get_controller()
    controller.save()
    return jsonify({'success': True, 'message': 'Game state saved'})

@game_bp.route('/reset', methods=['POST'])
def reset_game():
    """Hard reset: erase the save and start a new session."""
    controller = get_controller()
    controller.reset()
    current_app.logger.info("Hard reset requested")
    return jsonify({'success': True, 'game_state': controller.get_state()})

@game_bp.route('/analyze', methods=['POST'])
def analyze():
    """Request an AI flavor log; the result arrives later in the log list."""
    controller = get_controller()
    started = controller.request_analysis()
    status = 202 if started else 409
    return jsonify({'success': started, 'game_state': controller.get_state()}), status
