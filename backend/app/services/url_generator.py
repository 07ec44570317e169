"""URL generation for content locations."""

from collections.abc import Mapping
from urllib.parse import urlencode

from app.repositories.values import Location


class LocationUrlGenerator:
    """Builds the public URI of a location.

    Uses the location's URL alias when it has one, otherwise the system route
    of the content view.
    """

    def __init__(self, site_url: str = ""):
        self.site_url = site_url.rstrip("/")

    def generate(
        self,
        location: Location,
        params: Mapping[str, str] | None = None,
        absolute: bool = False,
    ) -> str:
        if location.url_alias:
            path = "/" + location.url_alias.strip("/")
        else:
            path = f"/view/content/{location.content_id}/full/1/{location.id}"

        if params:
            path = f"{path}?{urlencode(params)}"

        if absolute:
            return f"{self.site_url}{path}"
        return path
