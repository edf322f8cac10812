"""ablunit - ABLUnit test discovery for OpenEdge ABL sources."""

try:
    from importlib.metadata import version

    __version__ = version("ablunit")
except Exception:
    __version__ = "0.0.0.dev0+local"  # Fallback for development
