"""Custom exceptions for configuration and matching errors."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class FixtureError(ConfigurationError):
    """Error when a seed fixture file is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Invalid fixture file {path}: {reason}",
            "Check the artists/events/artworks/votes sections of the fixture.",
        )


class MatchingError(Exception):
    """Base exception for match-calculation errors."""


class EventNotFoundError(MatchingError):
    """Raised when an event id does not exist."""

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__(f"Event not found: {event_id}")


class EventPhaseError(MatchingError):
    """Raised when matching is requested for an event in the wrong phase."""

    def __init__(self, event_id: str, phase: str, allowed: list[str]) -> None:
        self.event_id = event_id
        self.phase = phase
        self.allowed = allowed
        super().__init__(
            f"Event {event_id} is in phase '{phase}', matching requires one of {allowed}"
        )


class InvalidPhaseTransitionError(MatchingError):
    """Raised when an event phase change skips or reverses a step."""

    def __init__(self, event_id: str, from_phase: str, to_phase: str) -> None:
        self.event_id = event_id
        self.from_phase = from_phase
        self.to_phase = to_phase
        super().__init__(f"Event {event_id} cannot move from '{from_phase}' to '{to_phase}'")


class MatchConflictError(MatchingError):
    """Raised when an artwork is already matched to a different partner."""

    def __init__(self, event_id: str, artwork_id: str, existing_match_id: str) -> None:
        self.event_id = event_id
        self.artwork_id = artwork_id
        self.existing_match_id = existing_match_id
        super().__init__(
            f"Artwork {artwork_id} already belongs to match {existing_match_id} "
            f"in event {event_id}"
        )
