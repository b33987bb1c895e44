"""trashctl - Query, restore and purge the freedesktop.org trash."""

__version__ = "0.1.0"
