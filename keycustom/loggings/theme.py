"""Console theme for registry logs."""

from rich.theme import Theme


# Only problems stand out; registry chatter stays muted
LOGGING_THEME = Theme({
    "logging.level.debug": "#6e7681",
    "logging.level.info": "white",
    "logging.level.warning": "#d29922",
    "logging.level.error": "#f85149",
    "logging.level.critical": "bold reverse #b81c1c",

    "log.time": "dim white",
    "log.message": "white",
    "log.path": "#6e7681",

    # Inline markup used in registry messages
    "resource": "#a5d6ff",
    "feature": "#d8a9ff",
    "muted": "#b0b8c1",
})
