from libsql_config.utils import logging, text, type_guards

# Note: config_normalization depends on libsql_config.exceptions and is imported directly to avoid circular imports

__all__ = ("logging", "text", "type_guards")
