"""Per-tick production and consumption totals.

Shared by the live tick and offline reconciliation so both paths apply the
same rates. Consumption is not gated on availability: a consumer reports its
full output even when its inputs have run dry, and the shortfall is settled
per resource by the tick's floor at zero.
"""
from neon_grid.game_data_loader import RESOURCE_TYPES


def empty_ledger():
    """A mapping of every resource kind to zero."""
    return {resource: 0.0 for resource in RESOURCE_TYPES}


def compute_production(buildings, catalog):
    """Return ``(production, consumption)`` for one tick.

    ``buildings`` maps building id to ``BuildingState``; ``catalog`` maps
    building id to ``BuildingDefinition``. Buildings at level 0 or switched
    off contribute nothing.
    """
    production = empty_ledger()
    consumption = empty_ledger()

    for building_id, definition in catalog.items():
        state = buildings.get(building_id)
        if state is None or state.level <= 0 or not state.active:
            continue

        for resource, rate in definition.production.items():
            production[resource] += rate * state.level
        for resource, rate in definition.consumption.items():
            consumption[resource] += rate * state.level

    return production, consumption


def net_rates(buildings, catalog):
    """Production minus consumption per resource, may be negative."""
    production, consumption = compute_production(buildings, catalog)
    return {resource: production[resource] - consumption[resource] for resource in RESOURCE_TYPES}
