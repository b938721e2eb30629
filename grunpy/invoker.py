import inspect
import logging
from .errors import NoSuchRuleError, RuleInvocationError

logger = logging.getLogger(__name__)

def lookup_rule(parser_type, rule_name):
    rules = getattr(parser_type, "rules", None) or {}
    if rule_name not in rules:
        raise NoSuchRuleError(rule_name, available=rules.keys())
    return rules[rule_name]

def check_rule_shape(entry, rule_name, parser):
    if not callable(entry):
        raise RuleInvocationError("Rule '{}' is not callable".format(rule_name))
    try:
        signature = inspect.signature(entry)
    except (TypeError, ValueError) as e:
        raise RuleInvocationError("Cannot inspect the signature of rule '{}': {}".format(rule_name, e)) from e
    try:
        signature.bind(parser)
    except TypeError as e:
        raise RuleInvocationError("Rule '{}{}' cannot be called without arguments".format(rule_name, signature)) from e
    if signature.return_annotation is None or signature.return_annotation == "None":
        raise RuleInvocationError("Rule '{}' is declared to return nothing".format(rule_name))

def invoke_rule(parser, rule_name):
    entry = lookup_rule(type(parser), rule_name)
    check_rule_shape(entry, rule_name, parser)
    parser.build_parse_tree = True
    logger.debug("Invoking rule '%s' on %s", rule_name, type(parser).__name__)
    tree = entry(parser)
    if tree is None:
        raise RuleInvocationError("Rule '{}' returned no parse tree".format(rule_name))
    return tree
