from typing import NamedTuple, Optional

EOF = -1
DEFAULT_CHANNEL = 0
HIDDEN_CHANNEL = 1
EOF_TEXT = "<EOF>"

class Token(NamedTuple):
    type: int
    text: Optional[str]
    start: int
    stop: int
    line: int
    column: int
    channel: int = DEFAULT_CHANNEL
    index: int = -1

    def with_index(self, index):
        return self._replace(index=index)

def eof_token(text, line, column):
    return Token(type=EOF, text=EOF_TEXT, start=len(text), stop=len(text) - 1, line=line, column=column)

class TokenStream:
    def __init__(self, lexer):
        self.lexer = lexer
        self.tokens = []
        self.filled = False

    def fill(self):
        if self.filled:
            return self.tokens
        tokens = []
        for token in self.lexer:
            tokens.append(token.with_index(len(tokens)))
            if token.type == EOF:
                break
        if len(tokens) == 0 or tokens[-1].type != EOF:
            last = tokens[-1] if tokens else None
            tokens.append(self._eof_after(last).with_index(len(tokens)))
        self.tokens = tokens
        self.filled = True
        return self.tokens

    def _eof_after(self, last):
        if last is None:
            return Token(type=EOF, text=EOF_TEXT, start=0, stop=-1, line=1, column=0)
        text = last.text or ""
        newlines = text.count("\n")
        if newlines:
            line = last.line + newlines
            column = len(text) - text.rfind("\n") - 1
        else:
            line = last.line
            column = last.column + len(text)
        return Token(type=EOF, text=EOF_TEXT, start=last.stop + 1, stop=last.stop, line=line, column=column)

    def on_channel(self, channel=DEFAULT_CHANNEL):
        return [token for token in self.fill() if token.channel == channel or token.type == EOF]

    def __iter__(self):
        return iter(self.fill())

    def __len__(self):
        return len(self.fill())
