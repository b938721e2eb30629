import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from grunpy.main import main, str_to_bool, get_arg_parser
from grunpy.errors import GrammarRuntimeError

GRAMMARS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "grammars")
TINY = os.path.join(GRAMMARS, "tiny")
TINY_INPUT = os.path.join(TINY, "input.txt")

def run(argv):
    out = io.StringIO()
    err = io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()

class TestMain(unittest.TestCase):
    def test_tokens_and_tree(self):
        code, out, err = run(["-s", TINY, "-r", "start", "-f", TINY_INPUT, "--tokens", "--tree"])
        self.assertEqual(0, code)
        self.assertEqual("[@0,0:0='x',<ID>,1:0]\n[@1,1:0='<EOF>',<-1>,1:1]\n(start x)\n", out)

    def test_flags_accept_booleans(self):
        code, out, err = run(["-s", TINY, "-r", "start", "-f", TINY_INPUT, "--tokens", "false", "--tree", "true"])
        self.assertEqual(0, code)
        self.assertEqual("(start x)\n", out)

    def test_unknown_rule(self):
        code, out, err = run(["-s", TINY, "-r", "bogusRule", "-f", TINY_INPUT, "--tokens", "--tree"])
        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertTrue(err.startswith("There was an error when trying to parse.\n"))
        self.assertIn("No rule 'bogusRule'", err)

    def test_missing_module(self):
        code, out, err = run(["-s", "no_such_grammar_module_for_grunpy", "-r", "start", "-f", TINY_INPUT])
        self.assertEqual(1, code)
        self.assertIn("is not a directory nor a module file name", err)

    def test_grammar_errors_are_reported_and_raised(self):
        with self.assertRaises(GrammarRuntimeError):
            run(["-s", os.path.join(TINY, "tiny.py"), "-r", "start", "-f", os.path.join(GRAMMARS, "multi", "words.txt")])

    def test_usage_error_before_harness(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["-s", TINY, "-f", TINY_INPUT])
        self.assertEqual(2, ctx.exception.code)

    def test_missing_test_file_is_a_usage_error(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["-s", TINY, "-r", "start", "-f", os.path.join(TINY, "absent.txt")])
        self.assertEqual(2, ctx.exception.code)
        self.assertIn("absent.txt", err.getvalue())

    def test_pretty(self):
        code, out, err = run(["-s", TINY, "-r", "start", "-f", TINY_INPUT, "--pretty"])
        self.assertEqual(0, code)
        self.assertIn("start", out)

class TestArguments(unittest.TestCase):
    def test_str_to_bool(self):
        self.assertTrue(str_to_bool(" True "))
        self.assertFalse(str_to_bool("false"))
        self.assertTrue(str_to_bool(True))
        with self.assertRaises(ValueError):
            str_to_bool("maybe")

    def test_defaults(self):
        args = get_arg_parser().parse_args(["-s", "src", "-r", "start", "-f", "in.txt"])
        self.assertFalse(args.tokens)
        self.assertFalse(args.tree)
        self.assertFalse(args.pretty)
        self.assertIsNone(args.grammar_name)
        self.assertIsNone(args.config)

class TestInputFile(unittest.TestCase):
    def test_undecodable_test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            test_file = os.path.join(tmp, "input.txt")
            with open(test_file, "wb") as f:
                f.write(b"\xff\xfe x")
            code, out, err = run(["-s", TINY, "-r", "start", "-f", test_file, "--tokens", "--tree"])
        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertTrue(err.startswith("There was an error when trying to parse.\n"))
        self.assertIn("is not valid UTF-8", err)
