from enum import IntEnum
from typing import Optional


class Level(IntEnum):
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    OFF = 6

    @property
    def label(self) -> str:
        """Lowercase name, as used in metric keys and exclusion lists."""
        return self.name.lower()

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["Level"]:
        """Look up a level by name (case-insensitive).

        Args:
            name: Level name such as 'WARN' or 'debug'

        Returns:
            Optional[Level]: The matching level, or None if the name is unknown
        """
        if not name:
            return None
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return None


EMITTING_LEVELS: tuple[Level, ...] = (
    Level.DEBUG,
    Level.INFO,
    Level.WARN,
    Level.ERROR,
    Level.FATAL,
)
