class HarnessError(Exception):
    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details is not None else []

    def __str__(self):
        return self.message

class ConfigError(HarnessError):
    pass

class CompilationError(HarnessError):
    def __init__(self, diagnostics, message="Compilation of the grammar module failed"):
        diagnostics = list(diagnostics)
        super().__init__("{} with {} diagnostic(s)".format(message, len(diagnostics)), details=diagnostics)

    @property
    def diagnostics(self):
        return self.details

class GrammarModuleNotFoundError(HarnessError, ModuleNotFoundError):
    pass

class NoLexerFoundError(HarnessError):
    pass

class NoParserFoundError(HarnessError):
    pass

class AmbiguousGrammarError(HarnessError):
    def __init__(self, role, candidates):
        names = [x.__name__ for x in candidates]
        super().__init__("More than one {} found: {}. Pass a grammar name to choose one".format(role, ", ".join(names)), details=names)
        self.candidates = list(candidates)

class NoSuchRuleError(HarnessError):
    def __init__(self, rule_name, available=()):
        available = sorted(available)
        super().__init__("No rule '{}'. Choose from: {}".format(rule_name, available), details=available)
        self.rule_name = rule_name
        self.available = available

class InputFileError(HarnessError):
    pass

class RuleInvocationError(HarnessError):
    pass

class GrammarRuntimeError(Exception):
    pass
