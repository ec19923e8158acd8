"""sitestage - live site document load/save pipeline."""

__version__ = "0.1.0"
