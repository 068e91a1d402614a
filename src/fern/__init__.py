"""FERN plot survey data model and file codecs."""

__version__ = "0.1.0"
