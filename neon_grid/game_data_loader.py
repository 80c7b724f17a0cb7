"""Game data loader for the building catalog JSON file."""
import json
import math
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

# The four fixed resource kinds, in display order
RESOURCE_TYPES = ('ENERGY', 'DATA', 'MATS', 'CREDITS')

# Building kinds, in unlock order
BUILDING_IDS = ('SOLAR_FARM', 'DATA_MINER', 'SYNTH_FACTORY', 'MAINFRAME', 'QUANTUM_RIG')


class UnknownBuildingError(KeyError):
    """Raised when a building kind is not in the catalog."""


@dataclass(frozen=True)
class ResourceCost:
    """One entry of a building's base cost list."""
    resource: str
    amount: float


@dataclass(frozen=True)
class BuildingDefinition:
    """Immutable catalog entry for one building kind."""
    id: str
    name: str
    description: str
    base_cost: tuple
    cost_multiplier: float
    production: MappingProxyType
    consumption: MappingProxyType
    flavor_text: str = ''

    @classmethod
    def from_dict(cls, building_id, data):
        """Build a definition from its JSON entry."""
        return cls(
            id=building_id,
            name=data.get('name', building_id),
            description=data.get('description', ''),
            base_cost=tuple(
                ResourceCost(entry['resource'], entry['amount'])
                for entry in data.get('base_cost', [])
            ),
            cost_multiplier=data.get('cost_multiplier', 1.0),
            production=MappingProxyType(dict(data.get('base_production', {}))),
            consumption=MappingProxyType(dict(data.get('base_consumption', {}))),
            flavor_text=data.get('flavor_text', ''),
        )

    def cost_for_level(self, level):
        """Cost of going from ``level`` to ``level + 1``.

        Each entry is ``floor(base * multiplier ** level)``, evaluated
        independently per resource. Costs too large for a float saturate to
        ``math.inf``, which no ledger can afford.
        """
        try:
            factor = self.cost_multiplier ** level
        except OverflowError:
            factor = math.inf

        costs = []
        for c in self.base_cost:
            amount = c.amount * factor
            costs.append(ResourceCost(c.resource, math.floor(amount) if math.isfinite(amount) else math.inf))
        return costs

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'base_cost': [{'resource': c.resource, 'amount': c.amount} for c in self.base_cost],
            'base_production': dict(self.production),
            'base_consumption': dict(self.consumption),
            'cost_multiplier': self.cost_multiplier,
            'flavor_text': self.flavor_text,
        }


class GameDataLoader:
    """Loads and caches game data from JSON files."""

    def __init__(self, data_dir=None):
        """Initialize the data loader."""
        if data_dir is None:
            self.data_dir = Path(__file__).parent / 'game_data'
        else:
            self.data_dir = Path(data_dir)

        self._buildings = None

    def load_buildings(self):
        """Load buildings data, keyed by building id in catalog order."""
        if self._buildings is None:
            file_path = self.data_dir / 'buildings.json'
            with open(file_path, 'r') as f:
                data = json.load(f)
            self._buildings = {
                building_id: BuildingDefinition.from_dict(building_id, entry)
                for building_id, entry in data['buildings'].items()
            }
        return self._buildings

    def get_building_by_id(self, building_id):
        """Get building definition by ID."""
        buildings = self.load_buildings()
        try:
            return buildings[building_id]
        except KeyError:
            raise UnknownBuildingError(building_id) from None

    def validate_data(self):
        """Validate loaded data structure."""
        errors = []

        buildings = self.load_buildings()
        if not buildings:
            errors.append("No buildings loaded")

        for building_id in BUILDING_IDS:
            if building_id not in buildings:
                errors.append(f"Missing building: {building_id}")

        for building_id, building in buildings.items():
            if building_id not in BUILDING_IDS:
                errors.append(f"Unknown building: {building_id}")
            if not building.base_cost:
                errors.append(f"{building_id}: empty cost list")
            if building.cost_multiplier <= 1:
                errors.append(f"{building_id}: cost multiplier must be greater than 1")

            referenced = [c.resource for c in building.base_cost]
            referenced += list(building.production) + list(building.consumption)
            for resource in referenced:
                if resource not in RESOURCE_TYPES:
                    errors.append(f"{building_id}: unknown resource {resource}")

        return errors

# Global instance
_game_data_loader = None

def get_game_data_loader(data_dir=None):
    """Get or create the global game data loader instance."""
    global _game_data_loader
    if _game_data_loader is None:
        _game_data_loader = GameDataLoader(data_dir)
    return _game_data_loader
