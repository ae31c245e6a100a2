"""Japanese learning-resource library: catalogue query API and stroke serializer."""

__version__ = "1.0.0"
