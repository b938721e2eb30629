import re
import logging
from lark import Lark, Tree
from lark.lexer import Token as LarkToken
from ..parser import Parser
from ..errors import GrammarRuntimeError
from ..formatter import escape_whitespace
from ..tokens import EOF
from .lex import LarkLexer

logger = logging.getLogger(__name__)

RULE_DEFINITION = re.compile(r"^[ \t]*[?!]?([a-z][a-z0-9_]*)(?:\.-?\d+)?[ \t]*:", re.MULTILINE)

class RuleTree(Tree):
    def to_string_tree(self, parser=None):
        label = escape_whitespace(str(self.data))
        children = [x for x in self.children if x is not None]
        if len(children) == 0:
            return label
        rendered = []
        for child in children:
            if isinstance(child, RuleTree):
                rendered.append(child.to_string_tree(parser))
            else:
                rendered.append(escape_whitespace(str(child)))
        return "({} {})".format(label, " ".join(rendered))

class LarkParser(Parser):
    lark_parser = None
    symbolic_names = ()

    def to_lark_token(self, token):
        if token.type == EOF:
            name = "$END"
        elif 0 < token.type < len(self.symbolic_names):
            name = self.symbolic_names[token.type]
        else:
            raise GrammarRuntimeError("Token type {} at {}:{} is not a terminal of this grammar".format(token.type, token.line, token.column))
        return LarkToken(name, token.text if token.type != EOF else "",
                         start_pos=token.start,
                         line=token.line,
                         column=token.column + 1,
                         end_pos=token.stop + 1)

    def parse_rule(self, rule_name):
        interactive = self.lark_parser.parse_interactive(start=rule_name)
        eof = None
        for token in self.token_stream.on_channel():
            if token.type == EOF:
                eof = token
                break
            interactive.feed_token(self.to_lark_token(token))
        logger.debug("Fed tokens to rule '%s', closing the parse", rule_name)
        return interactive.feed_eof(self.to_lark_token(eof) if eof is not None else None)

def find_rule_names(grammar_text):
    rule_names = []
    for match in RULE_DEFINITION.finditer(grammar_text):
        if match.group(1) not in rule_names:
            rule_names.append(match.group(1))
    return rule_names

def _rule_entry(rule_name):
    def entry(self):
        return self.parse_rule(rule_name)
    entry.__name__ = rule_name
    entry.__qualname__ = rule_name
    entry.is_rule = True
    return entry

def _class_name(name):
    return "".join(x.capitalize() for x in re.split(r"[^0-9a-zA-Z]+", name) if x) or "Grammar"

def build_grammar(name, grammar_text, module_name, lark_options=None):
    rule_names = find_rule_names(grammar_text)
    lark_parser = Lark(grammar_text,
                       parser="lalr",
                       lexer="basic",
                       start=rule_names or "start",
                       tree_class=RuleTree,
                       **(lark_options or {}))
    names = (None,) + tuple(x.name for x in lark_parser.terminals)
    ignored = frozenset(lark_parser.ignore_tokens)
    rule_table = {x: _rule_entry(x) for x in rule_names}
    logger.debug("Grammar '%s' has rules %s and terminals %s", name, rule_names, list(names[1:]))

    class GrammarLexer(LarkLexer):
        symbolic_names = names
        hidden = ignored
        grammar_name = name.lower()

    class GrammarParser(LarkParser):
        symbolic_names = names
        rules = rule_table
        grammar_name = name.lower()

    class_name = _class_name(name)
    for cls, suffix in ((GrammarLexer, "Lexer"), (GrammarParser, "Parser")):
        cls.lark_parser = lark_parser
        cls.__name__ = class_name + suffix
        cls.__qualname__ = class_name + suffix
        cls.__module__ = module_name
    return GrammarLexer, GrammarParser
