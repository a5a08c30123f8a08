# conftest.py
import os

# Keep test runs off the on-disk database; must run before `database` is imported
os.environ.setdefault("FARAID_DATABASE_URL", "sqlite://")
os.environ.setdefault("FARAID_DEFAULT_CURRENCY", "USD")
os.environ.setdefault("FARAID_DEFAULT_LANGUAGE", "en")
