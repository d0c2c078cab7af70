from __future__ import annotations

from typing import Any, Dict, List, Optional

AUTOPLAY_INTERVAL_SECONDS = 6

# Shown until hero_slide metaobjects are configured in Shopify
DEFAULT_SLIDES: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Find your perfect tone",
        "subtitle": "Curated instruments for every musician",
        "description": "From vintage guitars to studio-ready keys, explore handpicked gear tuned for feel and sound.",
        "cta_label": "Shop instruments",
        "cta_link": "/collections/all",
        "image_url": "https://images.pexels.com/photos/811838/pexels-photo-811838.jpeg?auto=compress&cs=tinysrgb&w=1200",
    },
    {
        "id": 2,
        "title": "Studio-ready sound",
        "subtitle": "Microphones, monitors & more",
        "description": "Build a creative space that inspires you with pro-grade audio gear and accessories.",
        "cta_label": "Browse studio gear",
        "cta_link": "/collections",
        "image_url": "https://images.pexels.com/photos/995301/pexels-photo-995301.jpeg?auto=compress&cs=tinysrgb&w=1200",
    },
    {
        "id": 3,
        "title": "Play every stage",
        "subtitle": "Live performance essentials",
        "description": "From pedals to PA, get everything you need to sound incredible on stage or on stream.",
        "cta_label": "Explore live gear",
        "cta_link": "/collections",
        "image_url": "https://images.pexels.com/photos/164745/pexels-photo-164745.jpeg?auto=compress&cs=tinysrgb&w=1200",
    },
]


class HeroCarousel:
    """Position state for the home page hero.

    The server renders `active_index` and the previous/next arrow targets;
    the browser script advances every `interval_seconds` using the same
    wrap-around rule as `next_index`.
    """

    interval_seconds = AUTOPLAY_INTERVAL_SECONDS

    def __init__(self, slides: Optional[List[Dict[str, Any]]] = None, active_index: int = 0):
        self.slides = list(slides) if slides else list(DEFAULT_SLIDES)
        self.active_index = 0
        self.go_to(active_index)

    @property
    def autoplay(self) -> bool:
        return len(self.slides) > 1

    def go_to(self, index: int) -> int:
        self.active_index = index % len(self.slides)
        return self.active_index

    @property
    def next_index(self) -> int:
        return (self.active_index + 1) % len(self.slides)

    @property
    def previous_index(self) -> int:
        return (self.active_index - 1) % len(self.slides)
