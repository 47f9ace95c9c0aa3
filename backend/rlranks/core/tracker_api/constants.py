"""Tracker API constants and translation tables."""

from typing import Dict

from ..enums import Platform, Playlist

# Platform codes used in tracker profile URLs
PLATFORM_CODES: Dict[Platform, str] = {
    Platform.STEAM: "steam",
    Platform.XBOX: "xbl",
    Platform.PLAYSTATION: "psn",
    Platform.EPIC: "epic",
}

# Tracker playlist names -> canonical playlists. Names not listed here fail
# the whole response.
PLAYLIST_NAMES: Dict[str, Playlist] = {
    "Ranked Duel 1v1": Playlist.DUEL,
    "Ranked Doubles 2v2": Playlist.DOUBLES,
    "Ranked Standard 3v3": Playlist.STANDARD,
    "Hoops": Playlist.HOOPS,
    "Rumble": Playlist.RUMBLE,
    "Dropshot": Playlist.DROPSHOT,
    "Snowday": Playlist.SNOW_DAY,
    "Tournament Matches": Playlist.TOURNAMENT,
}

PLAYLIST_SEGMENT_TYPE = "playlist"
