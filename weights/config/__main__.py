"""
Module: weights.config.__main__
"""

import argparse
import json

from weights.config import DEFAULT_CONF, config


def walk(data: dict, prefix: str = ""):
    """Yield the dotted key of every leaf value."""
    for k, v in data.items():
        full = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            yield from walk(v, full)
        else:
            yield full


def main():
    parser = argparse.ArgumentParser(description="Outline Weights Configuration Utility")
    subparsers = parser.add_subparsers(dest="command")

    # View value(s)
    view = subparsers.add_parser(
        "view", help="View a config value or the entire config"
    )
    view.add_argument("key", nargs="?", default=None, help="Config key (dot notation)")

    # Set value
    set_ = subparsers.add_parser("set", help="Set a config value")
    set_.add_argument("key", help="Config key (dot notation)")
    set_.add_argument("value", help="New value (JSON or string)")

    # List keys
    subparsers.add_parser("list", help="List all config keys")

    # Reset config
    subparsers.add_parser("reset", help="Reset config to defaults")

    args = parser.parse_args()

    if args.command == "view":
        if args.key:
            print(config.get_value(args.key))
        else:
            print(json.dumps(config.data, indent=2))
    elif args.command == "set":
        try:
            # e.g. `set weights.column 72` stores an int, not "72"
            value = json.loads(args.value)
        except json.JSONDecodeError:
            value = args.value
        config.set_value(args.key, value)
        config.save()
        print(f"Set {args.key} to {value}")
    elif args.command == "list":
        for key in walk(config.data):
            print(key)
    elif args.command == "reset":
        config.reset(initial_data=DEFAULT_CONF)
        print("Config reset to defaults. Reopen the editor to reload settings.")
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
