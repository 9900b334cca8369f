"""
nestedtags.config.defaults - Default configuration values
"""

CONFIG_FILENAME = ".nestedtags.toml"

ENV_PREFIX = "NESTEDTAGS_"

DEFAULT_COLORS = {
    "fileNodes": "#2563eb",
    "rootTags": "#16a34a",
    "childLevel1": "#fb923c",
    "childLevel2": "#ea580c",
    "childLevel3": "#dc2626",
}

DEFAULT_CONFIG = {
    "enableCustomColors": True,
    "enableCustomNodeColors": True,
    "colors": dict(DEFAULT_COLORS),
    "customNodeColors": [],
    "expansion": {
        "separator": "|",
        "marker": "#",
        "target": "leaf",
    },
}
