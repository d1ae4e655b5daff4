"""Project configuration package for HostelInsight (settings, URLs, ASGI/WSGI)."""
