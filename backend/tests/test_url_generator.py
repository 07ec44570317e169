"""Tests for location URL generation."""

from datetime import datetime, timezone

from app.repositories.values import ContentInfo, Location
from app.services.url_generator import LocationUrlGenerator

CONTENT_INFO = ContentInfo(
    id=76,
    content_type_id=16,
    name="Spring release",
    owner_id=42,
    section_id=1,
    main_location_id=80,
    main_language_code="eng-GB",
    published_date=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
)


def _location(url_alias=None) -> Location:
    return Location(id=80, path_string="/1/2/55/80/", content_info=CONTENT_INFO, url_alias=url_alias)


def test_url_alias():
    generator = LocationUrlGenerator("https://example.com")
    assert generator.generate(_location("News/Spring-release")) == "/News/Spring-release"


def test_url_alias_slashes_are_normalized():
    generator = LocationUrlGenerator()
    assert generator.generate(_location("/News/Spring-release/")) == "/News/Spring-release"


def test_system_route_without_alias():
    generator = LocationUrlGenerator()
    assert generator.generate(_location()) == "/view/content/76/full/1/80"


def test_params_become_query_string():
    generator = LocationUrlGenerator()
    url = generator.generate(_location("News"), {"page": "2", "sort": "date"})
    assert url == "/News?page=2&sort=date"


def test_absolute_url():
    generator = LocationUrlGenerator("https://example.com/")
    assert generator.generate(_location("News"), absolute=True) == "https://example.com/News"
