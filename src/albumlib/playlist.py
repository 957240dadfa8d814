from enum import Enum
from typing import Protocol, Sequence


class AddMode(Enum):
    """How an activated album is handed to the player."""

    REPLACE_AND_PLAY = "replace"
    """Replace the album playlist with the tracks and start playing it."""

    APPEND = "append"
    """Append the tracks to the active playlist without touching playback."""

    @property
    def replace(self) -> bool:
        return self is AddMode.REPLACE_AND_PLAY


class PlaylistTarget(Protocol):
    """The player-side collaborator that receives tracks to enqueue."""

    def enqueue(self, paths: Sequence[str], replace: bool) -> None: ...
