import sys
import logging
from typing import NamedTuple, Any
from .loader import load_grammar_module
from .resolver import resolve, extract_symbolic_names
from .invoker import lookup_rule, invoke_rule
from .formatter import format_tokens
from .tokens import TokenStream
from .errors import InputFileError

logger = logging.getLogger(__name__)

class Handoff(NamedTuple):
    tree: Any
    parser: Any
    lexer: Any
    symbolic_names: tuple
    tokens: list

def tree_to_string(tree, parser=None):
    if hasattr(tree, "to_string_tree"):
        return tree.to_string_tree(parser)
    return str(tree)

class Harness:
    def __init__(self, show_tokens=False, show_tree=False, config_file=None, out=None):
        self.show_tokens = show_tokens
        self.show_tree = show_tree
        self.config_file = config_file
        self.out = out

    def _print(self, line):
        print(line, file=self.out if self.out is not None else sys.stdout)

    def load(self, source):
        return load_grammar_module(source, config_file=self.config_file)

    def read_input(self, test_file):
        try:
            with open(test_file, encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise InputFileError("Cannot read test file '{}': {}".format(test_file, e.strerror or e)) from e
        except UnicodeDecodeError as e:
            raise InputFileError("Test file '{}' is not valid UTF-8: {}".format(test_file, e.reason),
                                 details=["byte offset {}".format(e.start)]) from e

    def process(self, source, start_rule, test_file, grammar_name=None):
        module = self.load(source)
        logger.debug("Loaded grammar module %s", module.__name__)
        text = self.read_input(test_file)
        return self.parse(module, text, start_rule, grammar_name=grammar_name)

    def parse(self, module, text, start_rule, grammar_name=None):
        lexer_type, parser_type = resolve(module, grammar_name)
        lookup_rule(parser_type, start_rule)

        lexer = lexer_type(text)
        symbolic_names = extract_symbolic_names(lexer_type, lexer)
        token_stream = TokenStream(lexer)
        tokens = token_stream.fill()
        logger.debug("Read %d tokens", len(tokens))

        if self.show_tokens:
            for line in format_tokens(tokens, symbolic_names):
                self._print(line)

        parser = parser_type(token_stream)
        tree = invoke_rule(parser, start_rule)

        if self.show_tree:
            self._print(tree_to_string(tree, parser))

        return Handoff(tree=tree, parser=parser, lexer=lexer, symbolic_names=symbolic_names, tokens=tokens)
