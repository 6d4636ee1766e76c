"""Docker Registry UI: browse repositories and tags of Docker registries."""

__version__ = "0.1.0"
