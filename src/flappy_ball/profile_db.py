"""
profile_db.py: Database layer for the local player profile.
"""

import json
import logging
import sqlite3

from .constants import DB_FILE, PROFILE_KEY
from .data_models import PlayerProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    """Loads and saves the single player profile in SQLite."""

    def __init__(self, db_file: str = DB_FILE, key: str = PROFILE_KEY):
        self.key = key
        self.persistent = True
        try:
            self.conn = sqlite3.connect(db_file)
            self.cur = self.conn.cursor()
            self.setup()
        except sqlite3.Error as e:
            # Progress still works for this session, it just won't be kept
            logger.warning("Could not open %s, progress will not be saved: %s", db_file, e)
            self.persistent = False
            self.conn = sqlite3.connect(":memory:")
            self.cur = self.conn.cursor()
            self.setup()

    def setup(self):
        """Creates tables if they don't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Profiles (
                key TEXT PRIMARY KEY,
                data TEXT NOT NULL
            )
        """)
        self.conn.commit()

    def load_profile(self) -> PlayerProfile:
        """Returns the saved profile, or a fresh one if nothing usable is stored."""
        try:
            self.cur.execute("SELECT data FROM Profiles WHERE key=?", (self.key,))
            row = self.cur.fetchone()
            if row is None:
                logger.info("No saved profile found, starting fresh.")
                return PlayerProfile()
            return PlayerProfile.from_record(json.loads(row[0]))
        except (sqlite3.Error, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load saved profile, using defaults: %s", e)
            return PlayerProfile()

    def save_profile(self, profile: PlayerProfile) -> bool:
        """Writes the profile. Failures are logged, never raised."""
        try:
            data = json.dumps(profile.to_record())
            self.cur.execute(
                "INSERT OR REPLACE INTO Profiles (key, data) VALUES (?, ?)", (self.key, data))
            self.conn.commit()
            return True
        except (sqlite3.Error, TypeError, ValueError) as e:
            logger.error("Failed to save profile: %s", e)
            return False

    def close(self):
        self.conn.close()
