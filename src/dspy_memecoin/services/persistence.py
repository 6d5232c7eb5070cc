"""Best-effort persistence of memes, coins and preferences."""

import json
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..database.local_state import (
    COINS_KEY,
    MEMES_KEY,
    PREFERENCES_KEY,
    LocalStateStorage,
)
from ..exceptions.base import StorageError
from ..models.coin import MemeCoin, UserPreferences
from ..models.meme import Meme, utcnow
from ..utils.logging import get_logger

logger = get_logger(__name__)


class StatePersistence:
    """
    Reads and writes the three state collections.

    Nothing here raises: read failures degrade to empty collections or
    default preferences, write failures are logged and dropped.
    """

    def __init__(self, storage: LocalStateStorage) -> None:
        self.storage = storage

    def _write(self, key: str, value: Any) -> bool:
        try:
            self.storage.write(key, value)
            return True
        except StorageError as e:
            logger.error("state_write_failed", key=key, error=e.message, exc_info=True)
            return False

    def _read(self, key: str) -> Optional[Any]:
        try:
            return self.storage.read(key)
        except StorageError as e:
            logger.error("state_read_failed", key=key, error=e.message, exc_info=True)
            return None

    def save_memes(self, memes: Sequence[Meme]) -> bool:
        return self._write(MEMES_KEY, [meme.to_dict() for meme in memes])

    def load_memes(self) -> List[Meme]:
        """Load stored memes, skipping entries that cannot be rebuilt."""
        raw = self._read(MEMES_KEY)
        if not isinstance(raw, list):
            return []
        memes: List[Meme] = []
        for entry in raw:
            try:
                memes.append(Meme.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("skipping_corrupt_meme", error=str(e))
        return memes

    def save_coins(self, coins: Sequence[MemeCoin]) -> bool:
        return self._write(COINS_KEY, [coin.dump() for coin in coins])

    def load_coins(self) -> List[MemeCoin]:
        raw = self._read(COINS_KEY)
        if not isinstance(raw, list):
            return []
        coins: List[MemeCoin] = []
        for entry in raw:
            try:
                coins.append(MemeCoin.model_validate(entry))
            except PydanticValidationError as e:
                logger.warning("skipping_corrupt_coin", error=str(e))
        return coins

    def save_preferences(self, preferences: UserPreferences) -> bool:
        return self._write(PREFERENCES_KEY, preferences.dump())

    def load_preferences(self) -> UserPreferences:
        raw = self._read(PREFERENCES_KEY)
        if isinstance(raw, dict):
            try:
                return UserPreferences.model_validate(raw)
            except PydanticValidationError as e:
                logger.warning("invalid_stored_preferences", error=str(e))
        return UserPreferences()

    def clear_all(self) -> bool:
        try:
            self.storage.clear()
            return True
        except StorageError as e:
            logger.error("state_clear_failed", error=e.message, exc_info=True)
            return False

    def export_data(self) -> Dict[str, Any]:
        """Snapshot of every collection plus the export time."""
        return {
            "memes": [meme.to_dict() for meme in self.load_memes()],
            "coins": [coin.dump() for coin in self.load_coins()],
            "preferences": self.load_preferences().dump(),
            "exportDate": utcnow().isoformat(),
        }

    def export_json(self) -> str:
        return json.dumps(self.export_data(), indent=2)

    def import_data(self, data: Any) -> bool:
        """
        Restore the collections present in an export document.

        Args:
            data: Parsed export document, or its JSON text

        Returns:
            True if every present collection was valid and written
        """
        try:
            if isinstance(data, str):
                data = json.loads(data)
            if not isinstance(data, dict):
                raise ValueError("Import document must be an object")
            memes = [Meme.from_dict(m) for m in data["memes"]] if data.get("memes") else None
            coins = [MemeCoin.model_validate(c) for c in data["coins"]] if data.get("coins") else None
            preferences = (
                UserPreferences.model_validate(data["preferences"]) if data.get("preferences") else None
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error("state_import_failed", error=str(e))
            return False

        ok = True
        if memes is not None:
            ok = self.save_memes(memes) and ok
        if coins is not None:
            ok = self.save_coins(coins) and ok
        if preferences is not None:
            ok = self.save_preferences(preferences) and ok
        return ok
