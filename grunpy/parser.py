from abc import ABC

def rule(fn):
    fn.is_rule = True
    return fn

class Parser(ABC):
    """
    Contract for the parser half of a grammar module.

    Rule entry points live in the class-level `rules` table, filled from the
    methods decorated with @rule when the class is created. Generated classes
    may pass a ready-made `rules` mapping in their namespace instead.
    """
    rules = {}
    grammar_name = None

    def __init__(self, token_stream):
        self.token_stream = token_stream
        self.build_parse_tree = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        rules = dict(cls.rules)
        for name, value in vars(cls).items():
            if getattr(value, "is_rule", False) or (name in rules and callable(value)):
                rules[name] = value
        cls.rules = rules

    @classmethod
    def rule_names(cls):
        return list(cls.rules.keys())
