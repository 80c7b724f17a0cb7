"""Database models for the game."""
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

class SaveSlot(db.Model):
    """Single-key snapshot storage.

    The payload is kept as raw JSON text rather than a JSON column so a
    damaged save can be detected and discarded on load.
    """
    __tablename__ = 'save_slots'

    key = db.Column(db.String(80), primary_key=True)
    payload = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

class SnapshotStore:
    """Reads, overwrites and clears the snapshot stored under one key.

    Must be used inside an application context.
    """

    def __init__(self, key):
        """Initialize store for ``key``."""
        self.key = key

    def load(self):
        """Return the stored payload text, or None when nothing is saved."""
        slot = db.session.get(SaveSlot, self.key)
        return slot.payload if slot is not None else None

    def save(self, payload):
        """Replace the stored payload wholesale."""
        slot = db.session.get(SaveSlot, self.key)
        if slot is None:
            slot = SaveSlot(key=self.key, payload=payload)
            db.session.add(slot)
        else:
            slot.payload = payload
        db.session.commit()

    def clear(self):
        """Erase the stored snapshot entirely."""
        slot = db.session.get(SaveSlot, self.key)
        if slot is not None:
            db.session.delete(slot)
            db.session.commit()
