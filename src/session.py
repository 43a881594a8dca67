"""Session-scoped preferences: the pinned quote per journal page.

The pins live in an explicit :class:`SessionPins` map that callers own
and pass by reference; nothing here is global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    text: str
    author: str


QUOTES: tuple[Quote, ...] = (
    Quote("The journey of a thousand miles begins with one step.", "Lao Tzu"),
    Quote("Knowing yourself is the beginning of all wisdom.", "Aristotle"),
    Quote("What we think, we become.", "Buddha"),
    Quote("Be yourself; everyone else is already taken.", "Oscar Wilde"),
    Quote("The unexamined life is not worth living.", "Socrates"),
    Quote("Well done is better than well said.", "Benjamin Franklin"),
    Quote("Fill your paper with the breathings of your heart.", "William Wordsworth"),
    Quote("Life can only be understood backwards; but it must be lived forwards.", "Søren Kierkegaard"),
    Quote("It does not matter how slowly you go as long as you do not stop.", "Confucius"),
    Quote("Nothing is permanent except change.", "Heraclitus"),
    Quote("The best way out is always through.", "Robert Frost"),
    Quote("We are what we repeatedly do.", "Will Durant"),
    Quote("Happiness depends upon ourselves.", "Aristotle"),
    Quote("Write it on your heart that every day is the best day in the year.", "Ralph Waldo Emerson"),
)


def quote_for(day: date) -> Quote:
    """Deterministic quote for a calendar day."""
    return QUOTES[day.toordinal() % len(QUOTES)]


@dataclass
class SessionPins:
    """Quotes pinned to specific journal days for the current session."""

    quotes: dict[date, Quote] = field(default_factory=dict)

    def pin_quote(self, day: date, quote: Quote) -> None:
        logger.debug("Pinned quote by %s to %s", quote.author, day)
        self.quotes[day] = quote

    def unpin(self, day: date) -> Quote | None:
        return self.quotes.pop(day, None)

    def pinned_quote(self, day: date) -> Quote | None:
        return self.quotes.get(day)


def daily_quote(day: date, pins: SessionPins | None = None) -> Quote:
    """The pinned quote for ``day`` if there is one, otherwise the day's quote."""
    if pins is not None:
        pinned = pins.pinned_quote(day)
        if pinned is not None:
            return pinned
    return quote_for(day)
