from ..lexer import Lexer
from ..tokens import Token, DEFAULT_CHANNEL, HIDDEN_CHANNEL, eof_token

INVALID_TYPE = 0

class LarkLexer(Lexer):
    lark_parser = None
    hidden = frozenset()

    @classmethod
    def type_ids(cls):
        return {name: type_id for type_id, name in enumerate(cls.symbolic_names) if name is not None}

    def tokenize(self):
        type_ids = self.type_ids()
        line = 1
        column = 0
        for lark_token in self.lark_parser.lex(self.text, dont_ignore=True):
            channel = HIDDEN_CHANNEL if lark_token.type in self.hidden else DEFAULT_CHANNEL
            yield Token(type=type_ids.get(lark_token.type, INVALID_TYPE),
                        text=lark_token.value,
                        start=lark_token.start_pos,
                        stop=lark_token.end_pos - 1,
                        line=lark_token.line,
                        column=lark_token.column - 1,
                        channel=channel)
            line = lark_token.end_line
            column = lark_token.end_column - 1
        yield eof_token(self.text, line, column)
