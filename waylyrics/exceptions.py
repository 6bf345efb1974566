"""Custom exceptions for waylyrics."""


class WaylyricsError(Exception):
    """Base exception for waylyrics."""
    pass


class PlayerError(WaylyricsError):
    """Error talking to the media player."""
    pass


class LyricsFetchError(WaylyricsError):
    """Error fetching lyrics from a remote service."""
    pass
