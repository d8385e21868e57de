"""Library-level defaults for wp-setup loaders."""

# Environment variables starting with this prefix are staged by load_from_env.
DEFAULT_ENV_PREFIX = "WP_"

# BOM-safe, so documents saved by Windows editors still parse.
DOCUMENT_ENCODING = "utf-8-sig"

SUPPORTED_SUFFIXES = (".json", ".toml")
