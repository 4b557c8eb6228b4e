"""GitHub release-hosting boundary."""

from reltag.github.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from reltag.github.releases import PublishError, ReleaseRequest, create_release

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "PublishError",
    "RealHttpClient",
    "ReleaseRequest",
    "create_release",
]
