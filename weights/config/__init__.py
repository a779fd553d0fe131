"""
Module: weights.config.__init__
"""

from jsonpycraft import (
    ConfigurationManager,
    JSONDecodeErrorHandler,
    JSONFileErrorHandler,
    JSONMap,
)

from weights.config.style import STYLE_DARK

DEFAULT_PATH_LOGS = ".weights/weights.log"
DEFAULT_PATH_CONF = ".weights/settings.json"

DEFAULT_CONF = {
    "logger": {
        "path": DEFAULT_PATH_LOGS,
        "level": "DEBUG",
        "type": "file",
    },
    "weights": {
        "column": 65,
        "show": True,  # weights by default, cookies otherwise
        "style": "class:weights",
        "cookie": {
            "left": "[",
            "left-signal": "+",
            "right-signal": "",
            "right": "]",
        },
    },
    "style": {
        "content": STYLE_DARK,
        "type": "dict",
    },
    "editor": {
        "tab-width": 4,
        "dialect": None,  # guessed from the file suffix
    },
}


def load_or_init_config(path: str, defaults: JSONMap):
    config = ConfigurationManager(path, initial_data=defaults)
    config.mkdir()
    try:
        config.load()
    except (JSONFileErrorHandler, JSONDecodeErrorHandler):
        config.save()
    return config


# NOTE: Do not assign to `config` in any function; it is a top-level singleton.
config = load_or_init_config(DEFAULT_PATH_CONF, DEFAULT_CONF)
