"""Global settings Data Access Object."""
from shared.database import get_db

GLOBAL_SETTING_ID = "global"


class SettingDAO:
    """Single-document store for settings shared by every workspace."""

    def __init__(self):
        """Initialize SettingDAO."""
        self.collection_name = "settings"

    async def get_global_ignore_patterns(self) -> list[str]:
        """Global ignore patterns, empty when never set."""
        db = get_db()
        doc = await db[self.collection_name].find_one({"setting_id": GLOBAL_SETTING_ID})
        if not doc:
            return []
        return list(doc.get("global_ignore_patterns") or [])

    async def set_global_ignore_patterns(self, patterns: list[str]) -> list[str]:
        """Replace the global ignore patterns (upsert)."""
        db = get_db()
        await db[self.collection_name].update_one(
            {"setting_id": GLOBAL_SETTING_ID},
            {"$set": {"global_ignore_patterns": patterns}},
            upsert=True,
        )
        return patterns
