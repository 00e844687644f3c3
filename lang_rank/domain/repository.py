"""Domain entities for repositories and their language usage."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity decoded from one listing page."""

    name: str
    full_name: str
    fork: bool = False
    archived: bool = False


@dataclass(frozen=True)
class LanguageStat:
    """One ranked (language, bytes) entry."""

    language: str
    bytes: int
