from .artist import Artist
from .artwork import Artwork
from .event import Event
from .match import Match, pair_key
from .notification import Notification
from .vote import Vote

__all__ = ["Artist", "Artwork", "Event", "Match", "Notification", "Vote", "pair_key"]
