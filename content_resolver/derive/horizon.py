"""
Horizon strip: a few promoted links shown below German content pages.

Entries are drawn without replacement from a weighted table. The draw is
seeded by the page's cache key, so the same page always gets the same
strip.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from ..core.view_models import HorizonEntry

_IMAGE_BASE = "https://de.serlo.org/_assets/img/horizon/"


@dataclass(frozen=True)
class WeightedEntry:
    entry: HorizonEntry
    weight: int


HORIZON_TABLE: tuple[WeightedEntry, ...] = (
    WeightedEntry(
        HorizonEntry(
            title="Serlo mitgestalten",
            text="Schreib Artikel, verbessere Aufgaben und hilf anderen beim Lernen.",
            url="/community",
            image_url=f"{_IMAGE_BASE}mitmachen.jpg",
        ),
        weight=6,
    ),
    WeightedEntry(
        HorizonEntry(
            title="Spenden",
            text="Serlo ist kostenlos und werbefrei. Hilf uns, dass es so bleibt.",
            url="/spenden",
            image_url=f"{_IMAGE_BASE}spenden.jpg",
        ),
        weight=4,
    ),
    WeightedEntry(
        HorizonEntry(
            title="Jobs bei Serlo",
            text="Arbeite mit uns an freier Bildung für alle.",
            url="/jobs",
            image_url=f"{_IMAGE_BASE}jobs.jpg",
        ),
        weight=3,
    ),
    WeightedEntry(
        HorizonEntry(
            title="Lerntipps",
            text="Wie lernt man am besten? Tipps für Prüfungen und Hausaufgaben.",
            url="/lerntipps",
            image_url=f"{_IMAGE_BASE}lerntipps.jpg",
        ),
        weight=3,
    ),
    WeightedEntry(
        HorizonEntry(
            title="Freie Lizenzen",
            text="Alle Inhalte stehen unter CC BY-SA und dürfen frei genutzt werden.",
            url="/lizenz",
            image_url=f"{_IMAGE_BASE}lizenz.jpg",
        ),
        weight=2,
    ),
    WeightedEntry(
        HorizonEntry(
            title="Newsletter",
            text="Erfahre als Erste*r, was es Neues bei Serlo gibt.",
            url="/newsletter",
            image_url=f"{_IMAGE_BASE}newsletter.jpg",
        ),
        weight=2,
    ),
)


def create_horizon(
    seed: str,
    count: int = 3,
    table: tuple[WeightedEntry, ...] = HORIZON_TABLE,
) -> tuple[HorizonEntry, ...]:
    """Draw `count` distinct entries, weighted and seeded.

    Args:
        seed: Stable per-page value (the cache key)
        count: Number of entries to draw; capped at the table size
        table: Weighted candidates

    Returns:
        Entries in draw order
    """
    rng = random.Random(seed)
    remaining = list(table)
    picked: list[HorizonEntry] = []
    while remaining and len(picked) < count:
        choice = rng.choices(remaining, weights=[item.weight for item in remaining])[0]
        remaining.remove(choice)
        picked.append(choice.entry)
    return tuple(picked)
