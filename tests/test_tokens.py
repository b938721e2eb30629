import unittest
from grunpy.tokens import Token, TokenStream, EOF, EOF_TEXT, HIDDEN_CHANNEL

class ListLexer:
    def __init__(self, tokens):
        self.tokens = tokens
        self.pulled = 0

    def __iter__(self):
        for token in self.tokens:
            self.pulled += 1
            yield token

class TestTokenStream(unittest.TestCase):
    def test_fill_assigns_indexes_and_appends_eof(self):
        lexer = ListLexer([
            Token(type=1, text="ab", start=0, stop=1, line=1, column=0),
            Token(type=2, text=" ", start=2, stop=2, line=1, column=2, channel=HIDDEN_CHANNEL),
        ])
        tokens = TokenStream(lexer).fill()
        self.assertEqual([0, 1, 2], [x.index for x in tokens])
        self.assertEqual(Token(type=EOF, text=EOF_TEXT, start=3, stop=2, line=1, column=3, index=2), tokens[-1])

    def test_eof_after_newline(self):
        lexer = ListLexer([Token(type=1, text="a\n", start=0, stop=1, line=1, column=0)])
        eof = TokenStream(lexer).fill()[-1]
        self.assertEqual((2, 0), (eof.line, eof.column))

    def test_empty_input(self):
        tokens = TokenStream(ListLexer([])).fill()
        self.assertEqual([Token(type=EOF, text=EOF_TEXT, start=0, stop=-1, line=1, column=0, index=0)], tokens)

    def test_stops_at_lexer_eof(self):
        lexer = ListLexer([
            Token(type=EOF, text=EOF_TEXT, start=0, stop=-1, line=1, column=0),
            Token(type=1, text="late", start=0, stop=3, line=1, column=0),
        ])
        tokens = TokenStream(lexer).fill()
        self.assertEqual(1, len(tokens))
        self.assertEqual(1, lexer.pulled)

    def test_fill_once(self):
        lexer = ListLexer([Token(type=1, text="a", start=0, stop=0, line=1, column=0)])
        stream = TokenStream(lexer)
        first = stream.fill()
        self.assertIs(first, stream.fill())
        self.assertEqual(1, lexer.pulled)

    def test_on_channel_keeps_eof(self):
        lexer = ListLexer([
            Token(type=1, text="a", start=0, stop=0, line=1, column=0),
            Token(type=2, text=" ", start=1, stop=1, line=1, column=1, channel=HIDDEN_CHANNEL),
        ])
        stream = TokenStream(lexer)
        self.assertEqual([1, EOF], [x.type for x in stream.on_channel()])
        self.assertEqual([2, EOF], [x.type for x in stream.on_channel(HIDDEN_CHANNEL)])
        self.assertEqual(3, len(stream))

    def test_tokens_are_immutable(self):
        token = Token(type=1, text="a", start=0, stop=0, line=1, column=0)
        with self.assertRaises(AttributeError):
            token.text = "b"
        self.assertEqual(4, token.with_index(4).index)
        self.assertEqual(-1, token.index)
