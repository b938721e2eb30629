from abc import ABC, abstractmethod
from .tokens import Token, DEFAULT_CHANNEL

class Lexer(ABC):
    """
    Contract for the lexer half of a grammar module.

    Subclasses are constructed from the raw input text and yield Token records
    from tokenize(). The symbolic_names table maps token type ids to names and
    is only used to render tokens; leave it empty to show numeric ids.
    """
    symbolic_names = ()
    grammar_name = None

    def __init__(self, text):
        self.text = text

    @abstractmethod
    def tokenize(self):
        raise NotImplementedError

    def __iter__(self):
        return iter(self.tokenize())

    def make_token(self, type, start, stop, line, column, channel=DEFAULT_CHANNEL):
        return Token(type=type, text=self.text[start:stop + 1], start=start, stop=stop,
                     line=line, column=column, channel=channel)
