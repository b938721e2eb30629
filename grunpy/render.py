from rich.console import Console
from rich.text import Text
from rich.tree import Tree as RichTree
from .formatter import escape_whitespace, type_display_name
from .tokens import Token

def _leaf_label(leaf, symbolic_names):
    if isinstance(leaf, Token):
        text = escape_whitespace(leaf.text) if leaf.text is not None else ""
        return Text.assemble((text, "bold"), " ", ("<{}>".format(type_display_name(leaf.type, symbolic_names)), "dim"))
    leaf_type = getattr(leaf, "type", None)
    if leaf_type is not None:
        return Text.assemble((escape_whitespace(str(leaf)), "bold"), " ", ("<{}>".format(leaf_type), "dim"))
    return Text(escape_whitespace(str(leaf)), style="bold")

def _node_label(node):
    return Text(str(getattr(node, "data", type(node).__name__)), style="cyan")

def _is_node(value):
    return hasattr(value, "children") and not isinstance(value, (str, Token))

def _add_children(branch, node, symbolic_names):
    for child in node.children:
        if child is None:
            continue
        if _is_node(child):
            _add_children(branch.add(_node_label(child)), child, symbolic_names)
        else:
            branch.add(_leaf_label(child, symbolic_names))

def build_tree(handoff):
    root = handoff.tree
    if not _is_node(root):
        return RichTree(_leaf_label(root, handoff.symbolic_names))
    tree = RichTree(_node_label(root))
    _add_children(tree, root, handoff.symbolic_names)
    return tree

def tree_print(handoff, console=None):
    (console or Console()).print(build_tree(handoff))
