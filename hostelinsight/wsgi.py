"""
WSGI config for the HostelInsight project.

It exposes the WSGI callable as a module-level variable named ``application``.
WebSocket subscriptions are only served by the ASGI entrypoint in
``hostelinsight.asgi``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hostelinsight.settings')

application = get_wsgi_application()
