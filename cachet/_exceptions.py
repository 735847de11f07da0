__all__ = ("CacheError", "ConfigurationError", "StorageError", "SerializationError")


class CacheError(Exception): ...


class ConfigurationError(CacheError): ...


class StorageError(CacheError): ...


class SerializationError(CacheError): ...
