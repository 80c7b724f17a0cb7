#!/usr/bin/env python3
"""Run script for the Neon Grid game server."""
import atexit
import os

from neon_grid.app import create_app

if __name__ == '__main__':
    app = create_app()

    # Initialize database
    with app.app_context():
        from neon_grid.models import db
        db.create_all()
        print("Database initialized.")

    controller = app.extensions['neon_grid']
    controller.start()
    atexit.register(controller.shutdown)

    port = int(os.environ.get('PORT', 5001))
    print("Starting Neon Grid game server...")
    print(f"API available at http://localhost:{port}/api/game/state")
    # The reloader would fork a second process with its own game loop
    app.run(debug=app.config['DEBUG'], host='0.0.0.0', port=port, use_reloader=False)
