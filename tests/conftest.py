import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("TELEGRAM_ENABLED", "false")

pytest_plugins = [
    "tests.fixtures.relay_fixtures",
]
