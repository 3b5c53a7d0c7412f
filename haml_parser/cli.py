"""haml-parser CLI — haml-parser check, haml-parser dump."""
import json
import logging
import os
import sys

import yaml

from haml_parser.ast_nodes import Root
from haml_parser.config import OUTPUT_FORMATS, get_config
from haml_parser.errors import HamlConfigError, HamlError
from haml_parser.parser import Parser

USAGE = "Usage: haml-parser <command> [--format json|yaml] [--verbose] <file.haml>"


def format_tree(tree: Root, fmt: str = "json", indent: int = 2) -> str:
    """Serialize the exported tree as JSON or YAML."""
    data = tree.to_dict()
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, indent=indent)
    return json.dumps(data, indent=indent)


def parse_file(filepath: str) -> Root:
    with open(filepath) as f:
        source = f.read()
    return Parser(filename=filepath).call(source)


def _split_args(args: list[str]) -> tuple[list[str], dict]:
    positional: list[str] = []
    options: dict = {"format": None, "verbose": False}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-v", "--verbose"):
            options["verbose"] = True
        elif arg == "--format":
            if i + 1 >= len(args):
                print("Error: --format needs a value", file=sys.stderr)
                sys.exit(1)
            options["format"] = args[i + 1]
            i += 1
        elif arg.startswith("--format="):
            options["format"] = arg.split("=", 1)[1]
        else:
            positional.append(arg)
        i += 1
    return positional, options


def main():
    positional, options = _split_args(sys.argv[1:])
    if not positional:
        print(USAGE, file=sys.stderr)
        print("Commands: check, dump", file=sys.stderr)
        sys.exit(1)

    command = positional[0]
    if command not in ("check", "dump"):
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    if len(positional) < 2:
        print(f"Usage: haml-parser {command} <file.haml>", file=sys.stderr)
        sys.exit(1)
    filepath = positional[1]
    if not os.path.exists(filepath):
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        sys.exit(1)

    try:
        config = get_config()
    except HamlConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    level = "DEBUG" if options["verbose"] else config["logging"]["level"]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    fmt = options["format"] or config["output"]["format"]
    if fmt not in OUTPUT_FORMATS:
        print(f"Error: unknown format: {fmt}", file=sys.stderr)
        sys.exit(1)

    try:
        tree = parse_file(filepath)
    except HamlError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if command == "check":
        print(f"OK: {filepath}")
        sys.exit(0)

    print(format_tree(tree, fmt, config["output"]["indent"]))


if __name__ == "__main__":
    main()
