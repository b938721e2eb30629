import inspect
import logging
from .lexer import Lexer
from .parser import Parser
from .errors import NoLexerFoundError, NoParserFoundError, AmbiguousGrammarError

logger = logging.getLogger(__name__)

def exposed_types(module):
    names = getattr(module, "__all__", None)
    if names is not None:
        members = [getattr(module, x, None) for x in names]
        return [x for x in members if inspect.isclass(x)]
    members = list(vars(module).values())
    return [x for x in members if inspect.isclass(x) and x.__module__ == module.__name__]

def grammar_name_of(cls, suffix):
    if cls.grammar_name is not None:
        return cls.grammar_name.lower()
    name = cls.__name__
    if name.endswith(suffix) and len(name) > len(suffix):
        name = name[:-len(suffix)]
    return name.lower()

def _select(types, base, suffix, grammar_name):
    candidates = [x for x in types if issubclass(x, base) and not inspect.isabstract(x)]
    if grammar_name is not None:
        candidates = [x for x in candidates if grammar_name_of(x, suffix) == grammar_name.lower()]
    return candidates

def find_lexer_type(module, grammar_name=None):
    candidates = _select(exposed_types(module), Lexer, "Lexer", grammar_name)
    if len(candidates) == 0:
        if grammar_name is not None:
            raise NoLexerFoundError("No lexer for grammar '{}' in module '{}'".format(grammar_name, module.__name__))
        raise NoLexerFoundError("No lexer found in module '{}'".format(module.__name__))
    if len(candidates) > 1:
        raise AmbiguousGrammarError("lexer", candidates)
    return candidates[0]

def find_parser_type(module, grammar_name=None):
    candidates = _select(exposed_types(module), Parser, "Parser", grammar_name)
    if len(candidates) == 0:
        if grammar_name is not None:
            raise NoParserFoundError("No parser for grammar '{}' in module '{}'".format(grammar_name, module.__name__))
        raise NoParserFoundError("No parser found in module '{}'".format(module.__name__))
    if len(candidates) > 1:
        raise AmbiguousGrammarError("parser", candidates)
    return candidates[0]

def resolve(module, grammar_name=None):
    lexer_type = find_lexer_type(module, grammar_name)
    parser_type = find_parser_type(module, grammar_name)
    logger.debug("Resolved lexer %s and parser %s in %s", lexer_type.__name__, parser_type.__name__, module.__name__)
    return lexer_type, parser_type

def extract_symbolic_names(lexer_type, lexer=None):
    source = lexer if lexer is not None else lexer_type
    names = getattr(source, "symbolic_names", None)
    if names is None:
        return ()
    return tuple(names)
