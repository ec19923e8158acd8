"""Load and serialization pipelines."""

from sitestage.pipeline.loader import Loader
from sitestage.pipeline.serializer import SerializationJob, Serializer

__all__ = ["Loader", "SerializationJob", "Serializer"]
