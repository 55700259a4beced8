"""Core middleware."""
from django.conf import settings
from django.utils.cache import add_never_cache_headers


class NoStoreAPIMiddleware:
    """Mark API responses as never cacheable.

    Dashboard figures and calendar events are computed on every read; a
    cached copy in a browser or proxy would show stale balances.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefixes = tuple(getattr(settings, "NO_STORE_PATH_PREFIXES", ("/api/",)))

    def __call__(self, request):
        response = self.get_response(request)
        if request.path.startswith(self.prefixes):
            add_never_cache_headers(response)
            response["Pragma"] = "no-cache"
        return response
