import os
import sys
import logging
import argparse
import lark
from .harness import Harness
from .errors import HarnessError
from .render import tree_print

def str_to_bool(text):
    if isinstance(text, bool):
        return text
    elif isinstance(text, str):
        text = text.strip().lower()
        if text == "true":
            return True
        elif text == "false":
            return False
    raise ValueError("Invalid value for conversion to boolean: '{}'".format(text))

def get_arg_parser():
    parser = argparse.ArgumentParser(prog="grunpy", formatter_class=argparse.ArgumentDefaultsHelpFormatter,
                                     description="Run a grammar module over a test file and show its tokens and parse tree")
    parser.add_argument("-s", "--source-path", required=True, help="Grammar source directory, .lark file, module file or importable module name")
    parser.add_argument("-g", "--grammar-name", default=None, help="Grammar name, picks one grammar when the module holds several")
    parser.add_argument("-r", "--rule-name", required=True, help="Start rule name")
    parser.add_argument("-f", "--test-file", required=True, help="Test file path")
    parser.add_argument("-c", "--config", default=None, help="Explicit config file (grunpy.json) location")
    parser.add_argument("--tokens", nargs='?', const=True, default=False, type=str_to_bool, help="Whether to print the tokens")
    parser.add_argument("--tree", nargs='?', const=True, default=False, type=str_to_bool, help="Whether to print the parse tree")
    parser.add_argument("--pretty", nargs='?', const=True, default=False, type=str_to_bool, help="Whether to render the parse tree with rich")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log what the harness is doing")
    return parser

def configure_logging(verbose):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    lark.logger.setLevel(level)

def print_error(exception):
    print("There was an error when trying to parse.", file=sys.stderr)
    print(exception, file=sys.stderr)
    for detail in getattr(exception, "details", []):
        print(detail, file=sys.stderr)

def main(argv=None):
    args_parser = get_arg_parser()
    args = args_parser.parse_args(argv)
    if not os.path.isfile(args.test_file):
        args_parser.error("test file '{}' does not exist".format(args.test_file))
    configure_logging(args.verbose)

    harness = Harness(show_tokens=args.tokens, show_tree=args.tree, config_file=args.config)
    try:
        handoff = harness.process(args.source_path, args.rule_name, args.test_file, grammar_name=args.grammar_name)
    except HarnessError as e:
        print_error(e)
        return 1
    except Exception as e:
        print_error(e)
        raise

    if args.pretty:
        tree_print(handoff)
    return 0
