from tuneheaven.modules.home.carousel import AUTOPLAY_INTERVAL_SECONDS, DEFAULT_SLIDES, HeroCarousel

SLIDES = [{"id": i, "title": f"Slide {i}"} for i in range(3)]


def test_default_slides_when_none():
    carousel = HeroCarousel([])
    assert carousel.slides == DEFAULT_SLIDES
    assert len(carousel.slides) == 3


def test_next_and_previous_wrap():
    carousel = HeroCarousel(SLIDES, active_index=2)
    assert carousel.next_index == 0
    assert carousel.previous_index == 1

    carousel = HeroCarousel(SLIDES)
    assert carousel.previous_index == 2


def test_go_to_wraps_modulo():
    carousel = HeroCarousel(SLIDES)
    assert carousel.go_to(4) == 1
    assert carousel.go_to(-1) == 2


def test_initial_index_out_of_range_wraps():
    assert HeroCarousel(SLIDES, active_index=7).active_index == 1


def test_autoplay_interval():
    assert AUTOPLAY_INTERVAL_SECONDS == 6
    assert HeroCarousel(SLIDES).autoplay is True


def test_single_slide_does_not_autoplay():
    carousel = HeroCarousel([{"id": 1, "title": "Only"}])
    assert carousel.autoplay is False
    assert carousel.next_index == 0
