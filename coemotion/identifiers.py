"""Document identifier resolution.

Records may carry either a typed identifier (a 12-byte ObjectId, written as
24 hex characters) or an arbitrary legacy string. ``resolve`` turns a raw
identifier into one of the two variants, and ``dual_lookup`` tries the typed
form before falling back to the raw string, so every lookup, update and
delete path issues at most two queries per identifier.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from bson import ObjectId

T = TypeVar("T")


@dataclass(frozen=True)
class ObjectIdentifier:
    """A raw identifier that parsed as an ObjectId."""

    raw: str
    value: ObjectId

    @property
    def canonical(self) -> str:
        return str(self.value)

    def lookup_keys(self) -> tuple[str, ...]:
        if self.canonical == self.raw:
            return (self.canonical,)
        return (self.canonical, self.raw)


@dataclass(frozen=True)
class StringIdentifier:
    """Fallback variant wrapping the raw identifier verbatim."""

    raw: str

    def lookup_keys(self) -> tuple[str, ...]:
        return (self.raw,)


Identifier = ObjectIdentifier | StringIdentifier


def resolve(raw: str) -> Identifier:
    """Interpret ``raw`` as an ObjectId, falling back to the plain string."""
    if isinstance(raw, str) and len(raw) == 24 and ObjectId.is_valid(raw):
        return ObjectIdentifier(raw=raw, value=ObjectId(raw))
    return StringIdentifier(raw=str(raw))


def new_identifier() -> str:
    """Generate a fresh typed identifier in its stored form."""
    return str(ObjectId())


def dual_lookup(identifier: Identifier | str, fetch: Callable[[str], T | None]) -> T | None:
    """Return the first non-None ``fetch(key)`` over the identifier's lookup keys."""
    if isinstance(identifier, str):
        identifier = resolve(identifier)
    for key in identifier.lookup_keys():
        found = fetch(key)
        if found is not None:
            return found
    return None
