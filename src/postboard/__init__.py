"""Postboard: browse a remote list of posts with client-side filter, sort and paging."""

__version__ = "0.1.0"
