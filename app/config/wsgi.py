"""
WSGI config for the media dashboard API.

The dashboard is served through ASGI (config/asgi.py) by default. Its views
are synchronous and run gateway calls through async_to_sync, so the same
URLconf also works behind a WSGI server such as gunicorn.

This file exposes the WSGI callable as a module-level variable named `application`.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
