"""docnav - navigation resolver and drift checker for markdown source trees."""

__version__ = "0.1.0"
