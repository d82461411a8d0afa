"""ASGI entrypoint: ``uvicorn screen_time_tracker.api.asgi:app``."""

from screen_time_tracker.api.app import create_app
from screen_time_tracker.config import Settings
from screen_time_tracker.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
