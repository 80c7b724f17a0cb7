"""Single owner of the running game.

Every entry point (tick, autosave, player actions, AI results) goes through
``GameController`` and runs under one lock, so no two read-modify-write
sequences on the ledger or building table interleave.
"""
import logging
import threading

from neon_grid.ai_log import FAILURE_MESSAGE, SystemLogGenerator
from neon_grid.game_engine import GameEngine
from neon_grid.game_loop import GameLoop
from neon_grid.models import SnapshotStore

logger = logging.getLogger(__name__)


class GameController:
    """Serializes access to a ``GameEngine`` and wires it to storage and timers."""

    def __init__(self, app, engine=None, store=None, log_generator=None):
        self.app = app
        settings = app.config
        self.engine = engine or GameEngine({
            'log_limit': settings['LOG_LIMIT'],
            'offline_grace_seconds': settings['OFFLINE_GRACE_SECONDS'],
            'manual_click_reward': settings['MANUAL_CLICK_REWARD'],
        })
        self.store = store or SnapshotStore(settings['SAVE_KEY'])
        self.log_generator = log_generator or SystemLogGenerator(
            api_key=settings['GEMINI_API_KEY'],
            model=settings['GEMINI_MODEL'],
            base_url=settings['GEMINI_BASE_URL'],
            timeout=settings['AI_TIMEOUT_SECONDS'],
        )
        self.loop = GameLoop(
            self.tick,
            self.save,
            tick_ms=settings['TICK_RATE_MS'],
            save_ms=settings['AUTO_SAVE_INTERVAL_MS'],
        )
        self.lock = threading.RLock()
        self.analyzing = False
        self._analysis_thread = None
        self._generation = 0

    # --------- lifecycle ---------

    def start(self, now=None):
        """Load the stored snapshot, reconcile offline time and start the timers."""
        with self.app.app_context():
            raw = self.store.load()
        with self.lock:
            gained = self.engine.load_snapshot(raw, now=now)
        if gained:
            logger.info("Granted offline gains: %s", gained)
        if self.app.config['GAME_LOOP_ENABLED']:
            self.loop.start()
        return gained

    def shutdown(self):
        """Stop the timers and write a final save."""
        self.loop.stop()
        self.save()

    # --------- timers ---------

    def tick(self):
        with self.lock:
            self.engine.tick()

    def save(self, now=None):
        """Overwrite the stored snapshot with the current state."""
        with self.lock:
            payload = self.engine.to_snapshot(now=now)
            with self.app.app_context():
                self.store.save(payload)
        logger.debug("Game saved under %s", self.store.key)
        return payload

    # --------- actions ---------

    def manual_gather(self):
        with self.lock:
            self.engine.manual_gather()

    def upgrade_building(self, building_id):
        with self.lock:
            return self.engine.upgrade_building(building_id)

    def toggle_building(self, building_id):
        with self.lock:
            return self.engine.toggle_building(building_id)

    def dismiss_offline_gains(self):
        with self.lock:
            self.engine.dismiss_offline_gains()

    def reset(self):
        """Erase the stored snapshot and start over as on first run."""
        with self.lock:
            with self.app.app_context():
                self.store.clear()
            self.engine.load_snapshot(None)
            self._generation += 1
        logger.info("Game reset; save %s cleared", self.store.key)

    def request_analysis(self):
        """Ask the AI collaborator for a flavor log without waiting on it.

        Returns False when an analysis is already in flight.
        """
        with self.lock:
            if self.analyzing:
                return False
            self.analyzing = True
            self.engine.add_log("SYSTEM: Initializing AI Diagnostic...", 'system')
            resources = dict(self.engine.resources)
            generation = self._generation

        self._analysis_thread = threading.Thread(
            target=self._run_analysis,
            args=(resources, generation),
            name='neon-grid-analysis',
            daemon=True,
        )
        self._analysis_thread.start()
        return True

    def _run_analysis(self, resources, generation):
        try:
            message = self.log_generator.generate(resources)
        except Exception:
            logger.exception("System log generator failed")
            message = FAILURE_MESSAGE

        with self.lock:
            self.analyzing = False
            # A reset while the request was in flight makes the result stale
            if generation == self._generation:
                self.engine.add_log(message, 'ai')

    def wait_for_analysis(self, timeout=None):
        """Block until the in-flight analysis, if any, has finished."""
        thread = self._analysis_thread
        if thread is not None:
            thread.join(timeout)

    # --------- reads ---------

    def get_state(self):
        with self.lock:
            state = self.engine.get_state()
            state['analyzing'] = self.analyzing
        return state

    def get_catalog(self):
        return [definition.to_dict() for definition in self.engine.catalog.values()]
