"""Encoding and decoding of the persisted game snapshot.

The snapshot is a single JSON document::

    {
        "resources": {"ENERGY": 0, "DATA": 0, "MATS": 0, "CREDITS": 0},
        "buildings": {"SOLAR_FARM": {"level": 0, "active": true}, ...},
        "lastSaveTime": 1700000000000
    }

Logs are never part of it.
"""
import json
import math
from dataclasses import dataclass

from neon_grid.game_data_loader import BUILDING_IDS, RESOURCE_TYPES
from neon_grid.state import BuildingState, default_buildings


class SnapshotError(ValueError):
    """Raised when a stored snapshot cannot be decoded."""


@dataclass
class GameSnapshot:
    """Decoded snapshot: resource ledger, building table and save time."""
    resources: dict
    buildings: dict
    last_save_time: int


def encode_snapshot(resources, buildings, last_save_time):
    """Serialize the full state to JSON text."""
    return json.dumps({
        'resources': {resource: resources.get(resource, 0.0) for resource in RESOURCE_TYPES},
        'buildings': {building_id: state.to_dict() for building_id, state in buildings.items()},
        'lastSaveTime': int(last_save_time),
    })


def _is_finite_number(value):
    """True for ints and floats that fit in a finite float."""
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _decode_resources(data):
    if not isinstance(data, dict):
        raise SnapshotError("resources must be an object")

    resources = {}
    for resource in RESOURCE_TYPES:
        value = data.get(resource, 0)
        if not _is_finite_number(value) or value < 0:
            raise SnapshotError(f"invalid amount for {resource}: {value!r}")
        resources[resource] = float(value)
    return resources


def _decode_buildings(data):
    if not isinstance(data, dict):
        raise SnapshotError("buildings must be an object")

    buildings = default_buildings()
    for building_id in BUILDING_IDS:
        entry = data.get(building_id)
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise SnapshotError(f"invalid building entry for {building_id}")

        level = entry.get('level', 0)
        if not _is_finite_number(level) or level < 0 or level != int(level):
            raise SnapshotError(f"invalid level for {building_id}: {level!r}")

        # Older saves omit the power switch; those buildings are on
        active = entry.get('active', True)
        if not isinstance(active, bool):
            raise SnapshotError(f"invalid active flag for {building_id}: {active!r}")

        buildings[building_id] = BuildingState(level=int(level), active=active)
    return buildings


def decode_snapshot(raw):
    """Parse snapshot JSON text into a ``GameSnapshot``.

    Raises ``SnapshotError`` for anything that is not a well-formed snapshot.
    Unknown resource or building keys are ignored.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"snapshot is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError("snapshot must be an object")

    for key in ('resources', 'buildings', 'lastSaveTime'):
        if key not in data:
            raise SnapshotError(f"snapshot is missing {key}")

    last_save_time = data['lastSaveTime']
    if not _is_finite_number(last_save_time):
        raise SnapshotError(f"invalid lastSaveTime: {last_save_time!r}")

    return GameSnapshot(
        resources=_decode_resources(data['resources']),
        buildings=_decode_buildings(data['buildings']),
        last_save_time=int(last_save_time),
    )
