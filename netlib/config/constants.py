"""
Configuration-related constants and resource limits.
"""

# Maximum config file size (1MB)
MAX_CONFIG_SIZE_BYTES = 1024 * 1024

DEFAULT_ENV_PREFIX = "NETLIB_"

DEFAULTS: dict = {
    "net": {
        "family": "any",
        "backlog": 128,
        "recv_size": 4096,
    },
    "logging": {
        "level": "info",
        "micros": False,
        "colors": True,
    },
}
