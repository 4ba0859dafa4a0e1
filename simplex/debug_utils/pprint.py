import json

from simplex.evaluation.special_forms import SPECIAL_FORMS
from simplex.types.ast_node import ASTNode, NodeKind

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_KIND = "\033[90m"
COLOR_IDENTIFIER = "\033[94m"
COLOR_SPECIAL_FORM = "\033[95m"
COLOR_NUMBER = "\033[92m"
COLOR_STRING = "\033[93m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_depth": 64,
    "display_legend": False,
    "display_position": False,
    "color_kinds": False,
    "color_identifiers": False,
    "color_special_forms": False,
    "color_literals": False,
}

COLOR_OPTIONS = {
    **DEFAULT_OPTIONS,
    "color_kinds": True,
    "color_identifiers": True,
    "color_special_forms": True,
    "color_literals": True,
}


# ----------------- Colorize utility -----------------
def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def colorize(node: ASTNode, options: dict = DEFAULT_OPTIONS) -> str:
    """The payload of a leaf node as it appears in the tree dump."""
    match node.kind:
        case NodeKind.IDENTIFIER:
            name = node.string()
            if name in SPECIAL_FORMS:
                return _paint(name, COLOR_SPECIAL_FORM, options.get("color_special_forms", False))
            return _paint(name, COLOR_IDENTIFIER, options.get("color_identifiers", False))
        case NodeKind.STRING:
            return _paint(repr(node.string()), COLOR_STRING, options.get("color_literals", False))
        case NodeKind.INTEGER | NodeKind.FLOATING_POINT:
            return _paint(str(node.payload), COLOR_NUMBER, options.get("color_literals", False))
    return str(node.payload)


# ----------------- Pretty printer -----------------
def pprint_ast(node: ASTNode, indent: int = 0, options: dict = DEFAULT_OPTIONS) -> str:
    """
    One node per line, two spaces of indentation per depth:

        Program
          Expression
            Identifier print
    """
    lines: list[str] = []
    if options.get("display_legend", False) and indent == 0:
        legend_items = [
            _paint("Kind", COLOR_KIND, True),
            _paint("Identifier", COLOR_IDENTIFIER, True),
            _paint("Special Form", COLOR_SPECIAL_FORM, True),
            _paint("Number", COLOR_NUMBER, True),
            _paint("String", COLOR_STRING, True),
        ]
        lines.append("Color Key: " + " | ".join(legend_items))
    _write_node(node, indent, options, lines)
    return "\n".join(lines)


def _write_node(node: ASTNode, depth: int, options: dict, lines: list[str]) -> None:
    pad = "  " * depth
    if depth >= options.get("max_depth", 64):
        lines.append(pad + "...")
        return

    label = _paint(node.kind.value, COLOR_KIND, options.get("color_kinds", False))
    if options.get("display_position", False):
        label += f" @{node.line}|{node.col}"

    if isinstance(node.payload, tuple):
        lines.append(pad + label)
        for child in node.children():
            _write_node(child, depth + 1, options, lines)
    else:
        lines.append(f"{pad}{label} {colorize(node, options)}")


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    """Overlay a JSON object of options on DEFAULT_OPTIONS. Raises ValueError for anything else."""
    user_opts = json.loads(json_str)
    if not isinstance(user_opts, dict):
        raise ValueError(f"expected a JSON object, got {type(user_opts).__name__}")
    unknown = sorted(set(user_opts) - set(DEFAULT_OPTIONS))
    if unknown:
        raise ValueError(f"unknown option(s): {', '.join(unknown)}")
    return {**DEFAULT_OPTIONS, **user_opts}
