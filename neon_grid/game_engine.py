"""Core game engine for simulation."""
import logging
import math

from neon_grid.config import Config
from neon_grid.game_data_loader import RESOURCE_TYPES, UnknownBuildingError, get_game_data_loader
from neon_grid.production import compute_production, empty_ledger, net_rates
from neon_grid.snapshot import SnapshotError, decode_snapshot, encode_snapshot
from neon_grid.state import LogEntry, default_buildings, now_ms

logger = logging.getLogger(__name__)


class GameEngine:
    """Core game simulation engine.

    Owns the resource ledger, the building table, the terminal log and the
    pending offline-gains notice. Not thread-safe on its own; callers
    serialize access (see ``GameController``).
    """

    def __init__(self, config=None, catalog=None):
        """Initialize game engine."""
        self.config = config or {}
        self.catalog = catalog if catalog is not None else get_game_data_loader().load_buildings()

        self.log_limit = self.config.get('log_limit', Config.LOG_LIMIT)
        self.grace_seconds = self.config.get('offline_grace_seconds', Config.OFFLINE_GRACE_SECONDS)
        self.manual_reward = dict(self.config.get('manual_click_reward', Config.MANUAL_CLICK_REWARD))

        self.reset_state()

    def reset_state(self):
        """Return every field to first-run defaults."""
        self.resources = empty_ledger()
        self.buildings = default_buildings()
        self.logs = []
        self.offline_gains = None
        self.tick_count = 0

    # --------- logging ---------

    def add_log(self, message, log_type='info'):
        """Prepend a terminal entry, keeping only the newest ``log_limit``."""
        entry = LogEntry(message=message, type=log_type)
        self.logs = [entry] + self.logs[:self.log_limit - 1]
        return entry

    # --------- simulation ---------

    def tick(self):
        """Advance the ledger by one tick, flooring every resource at zero."""
        production, consumption = compute_production(self.buildings, self.catalog)
        previous = self.resources

        next_resources = {}
        for resource in RESOURCE_TYPES:
            value = previous[resource] + production[resource] - consumption[resource]
            next_resources[resource] = max(value, 0.0)

        self.resources = next_resources
        self.tick_count += 1
        return production, consumption

    def get_rates(self):
        """Net rate per resource for active buildings."""
        return net_rates(self.buildings, self.catalog)

    # --------- actions ---------

    def _get_definition(self, building_id):
        try:
            return self.catalog[building_id]
        except KeyError:
            raise UnknownBuildingError(building_id) from None

    def building_cost(self, building_id):
        """Cost list for the next level of a building."""
        definition = self._get_definition(building_id)
        return definition.cost_for_level(self.buildings[building_id].level)

    def can_afford(self, building_id):
        """Check whether the ledger covers every entry of the next-level cost."""
        return all(
            self.resources[cost.resource] >= cost.amount
            for cost in self.building_cost(building_id)
        )

    def upgrade_building(self, building_id):
        """Construct or upgrade a building by one level.

        All-or-nothing: either every cost entry is deducted and the level goes
        up by one, or nothing changes and an alert is logged.
        """
        definition = self._get_definition(building_id)
        costs = self.building_cost(building_id)

        if not all(self.resources[cost.resource] >= cost.amount for cost in costs):
            self.add_log(f"INSUFFICIENT RESOURCES FOR {definition.name}", 'alert')
            return False

        resources = dict(self.resources)
        for cost in costs:
            resources[cost.resource] -= cost.amount
        self.resources = resources

        state = self.buildings[building_id]
        state.level += 1
        self.add_log(f"UPGRADE: {definition.name} upgraded to Level {state.level}", 'info')
        return True

    def toggle_building(self, building_id):
        """Flip a constructed building's power switch; returns the new value."""
        definition = self._get_definition(building_id)
        state = self.buildings[building_id]
        if state.level <= 0:
            return state.active

        state.active = not state.active
        status = 'online' if state.active else 'offline'
        self.add_log(f"POWER: {definition.name} {status}", 'info')
        return state.active

    def manual_gather(self):
        """Grant the fixed manual-gather bundle."""
        resources = dict(self.resources)
        for resource, amount in self.manual_reward.items():
            resources[resource] += amount
        self.resources = resources

    def dismiss_offline_gains(self):
        """Clear the offline-gains notice."""
        self.offline_gains = None

    def visible_buildings(self):
        """Buildings in catalog order up to and including the first unbuilt one."""
        visible = []
        for building_id in self.catalog:
            visible.append(building_id)
            if self.buildings[building_id].level == 0:
                break
        return visible

    # --------- persistence ---------

    def to_snapshot(self, now=None):
        """Serialize resources and buildings stamped with the save time."""
        return encode_snapshot(self.resources, self.buildings, now if now is not None else now_ms())

    def load_snapshot(self, raw, now=None):
        """Restore from stored snapshot text and grant offline progress.

        ``raw`` is the stored JSON text, or ``None`` when nothing was saved.
        A snapshot that fails to decode is discarded in favour of a fresh
        state. Returns the offline gains mapping, or ``None`` when no gains
        were granted.
        """
        self.reset_state()

        if raw is None:
            self.add_log("SYSTEM: New session initialized.", 'system')
            return None

        try:
            snapshot = decode_snapshot(raw)
        except SnapshotError as e:
            logger.warning("Discarding corrupted save: %s", e)
            self.add_log("ERROR: Save file corrupted. Resetting.", 'alert')
            return None

        self.buildings = snapshot.buildings
        resources = dict(snapshot.resources)

        now = now if now is not None else now_ms()
        seconds_offline = (now - snapshot.last_save_time) / 1000

        if seconds_offline <= self.grace_seconds:
            self.resources = resources
            self.add_log("SYSTEM: Session restored.", 'system')
            return None

        # Only positive-net resources accrue; offline time never drains stock
        production, consumption = compute_production(snapshot.buildings, self.catalog)
        gained = {}
        for resource in RESOURCE_TYPES:
            net = production[resource] - consumption[resource]
            if net > 0:
                amount = net * seconds_offline
                gained[resource] = amount
                resources[resource] += amount

        self.resources = resources
        self.offline_gains = gained
        self.add_log(
            f"SYSTEM: Resumed session. Offline duration: {int(seconds_offline + 0.5)}s",
            'system',
        )
        return gained

    def get_state(self):
        """Everything the renderer needs for one frame."""
        return {
            'resources': dict(self.resources),
            'rates': self.get_rates(),
            'buildings': {building_id: state.to_dict() for building_id, state in self.buildings.items()},
            'visible_buildings': self.visible_buildings(),
            'costs': {
                building_id: {
                    cost.resource: cost.amount if math.isfinite(cost.amount) else None
                    for cost in self.building_cost(building_id)
                }
                for building_id in self.catalog
            },
            'can_afford': {building_id: self.can_afford(building_id) for building_id in self.catalog},
            'logs': [entry.to_dict() for entry in self.logs],
            'offline_gains': dict(self.offline_gains) if self.offline_gains is not None else None,
            'tick': self.tick_count,
        }
