"""haml_parser MCP Server — exposes the Haml parser via MCP protocol."""

from mcp.server.fastmcp import FastMCP

from haml_parser.cli import format_tree, parse_file
from haml_parser.config import OUTPUT_FORMATS
from haml_parser.errors import HamlError

mcp = FastMCP("haml-parser")


@mcp.tool()
def haml_check(filepath: str) -> str:
    """Check Haml syntax without rendering. Validates that the file parses.

    Args:
        filepath: Path to the .haml file to check
    """
    return check_haml_file(filepath)


def check_haml_file(filepath: str) -> str:
    """Core logic for checking a haml file — testable without MCP."""
    try:
        parse_file(filepath)
        return f"OK: {filepath}"
    except FileNotFoundError:
        return f"Error: file not found: {filepath}"
    except OSError as e:
        return f"Error reading file: {e}"
    except HamlError as e:
        return f"Error: {e}"


@mcp.tool()
def haml_dump(filepath: str, fmt: str = "json") -> str:
    """Parse a Haml file and return its AST as JSON or YAML.

    Args:
        filepath: Path to the .haml file to parse
        fmt: Output format, "json" or "yaml"
    """
    return dump_haml_file(filepath, fmt)


def dump_haml_file(filepath: str, fmt: str = "json") -> str:
    """Core logic for dumping a haml file — testable without MCP."""
    if fmt not in OUTPUT_FORMATS:
        return f"Error: unknown format: {fmt}"
    try:
        tree = parse_file(filepath)
    except FileNotFoundError:
        return f"Error: file not found: {filepath}"
    except OSError as e:
        return f"Error reading file: {e}"
    except HamlError as e:
        return f"Error: {e}"
    return format_tree(tree, fmt)


HAML_SYNTAX_GUIDE = """\
# Haml line prefixes understood by the parser

Indentation (spaces only, same width at every level) nests lines.

| Prefix | Meaning |
|--------|---------|
| `!!!` | doctype, e.g. `!!! 5` |
| `%tag` | element: `%a.cls#id{href: url}(title='t')[obj]<>/ content` |
| `.cls` / `#id` | shorthand for `%div.cls` / `%div#id` |
| `=` `~` | output expression (`~` preserves whitespace) |
| `!=` `&=` | unescaped / escaped output expression |
| `-` | control-flow statement (`- if x`, `- else`, `- end`) |
| `-#` | author-only comment; nested lines are kept as text |
| `/` | HTML comment; `/[if IE]` is a conditional comment |
| `:name` | filter block; nested lines are captured verbatim |
| `\\` | escape: the rest of the line is plain text |
| trailing space and pipe | joins consecutive lines into one |

Anything else is plain text.
"""


@mcp.prompt()
def haml_guide() -> str:
    """Reference of the Haml line syntax the parser accepts."""
    return HAML_SYNTAX_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
