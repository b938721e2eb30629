import os
import re
import sys
import glob
import types
import logging
import importlib
import importlib.util
from contextlib import contextmanager
from lark.exceptions import LarkError
from .config import Config, load_config_from_path, load_config_from_directory
from .errors import CompilationError, GrammarModuleNotFoundError
from .lark.parse import build_grammar

logger = logging.getLogger(__name__)

MODULE_PREFIX = "grunpy_grammar_"
LARK_SUFFIX = ".lark"

def module_name_for(path):
    stem = os.path.splitext(os.path.basename(os.path.normpath(path)))[0]
    return MODULE_PREFIX + (re.sub(r"\W", "_", stem) or "module")

def find_files(directory, include):
    found = []
    for pattern in include:
        for path in sorted(glob.glob(os.path.join(directory, pattern), recursive=True)):
            path = os.path.normpath(path)
            if os.path.isfile(path) and path not in found:
                found.append(path)
    logger.debug("Matched %d file(s) in %s for %s", len(found), directory, include)
    return found

def _diagnostic(path, line, column, message):
    if line is None:
        return "{}: {}".format(path, message)
    if column is None:
        return "{}:{}: {}".format(path, line, message)
    return "{}:{}:{}: {}".format(path, line, column, message)

def _compile_source(path, diagnostics):
    try:
        with open(path, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        diagnostics.append(_diagnostic(path, None, None, "cannot read file: {}".format(e.strerror or e)))
        return None
    try:
        return compile(source, path, "exec")
    except SyntaxError as e:
        diagnostics.append(_diagnostic(e.filename or path, e.lineno, e.offset, e.msg))
    except ValueError as e:
        diagnostics.append(_diagnostic(path, None, None, str(e)))
    return None

def _compile_grammar(path, module_name, lark_options, diagnostics):
    name = os.path.splitext(os.path.basename(path))[0]
    try:
        with open(path, encoding="utf-8") as f:
            grammar_text = f.read()
    except OSError as e:
        diagnostics.append(_diagnostic(path, None, None, "cannot read file: {}".format(e.strerror or e)))
        return ()
    try:
        return build_grammar(name, grammar_text, module_name, lark_options)
    except LarkError as e:
        first_line = str(e).strip().splitlines()[0] if str(e).strip() else type(e).__name__
        diagnostics.append(_diagnostic(path, getattr(e, "line", None), getattr(e, "column", None), first_line))
    return ()

def _check_references(references, diagnostics):
    paths = []
    for reference in references:
        if os.path.exists(reference):
            paths.append(os.path.abspath(reference))
            continue
        try:
            importlib.import_module(reference)
        except ImportError as e:
            diagnostics.append("reference '{}': {}".format(reference, e))
    return paths

@contextmanager
def _search_path(paths):
    added = [x for x in paths if x not in sys.path]
    sys.path[:0] = added
    try:
        yield
    finally:
        for path in added:
            if path in sys.path:
                sys.path.remove(path)

def compile_module(files, references=(), name=None, lark_options=None):
    name = name or MODULE_PREFIX + "module"
    diagnostics = []
    codes = []
    grammar_types = []
    for path in files:
        if path.endswith(LARK_SUFFIX):
            grammar_types.extend(_compile_grammar(path, name, lark_options, diagnostics))
        else:
            code = _compile_source(path, diagnostics)
            if code is not None:
                codes.append((path, code))
    reference_paths = _check_references(references, diagnostics)
    if len(files) == 0:
        diagnostics.append("no source files matched")
    if diagnostics:
        raise CompilationError(diagnostics)

    module = types.ModuleType(name)
    module.__file__ = files[0]
    for cls in grammar_types:
        setattr(module, cls.__name__, cls)
    sys.modules[name] = module
    with _search_path(reference_paths):
        for path, code in codes:
            try:
                exec(code, module.__dict__)
            except Exception as e:
                del sys.modules[name]
                raise CompilationError([_diagnostic(path, None, None, "{}: {}".format(type(e).__name__, e))]) from e
    logger.debug("Compiled %d source file(s) and %d grammar class(es) into %s", len(codes), len(grammar_types), name)
    return module

def load_from_directory(directory, config_file=None):
    config = load_config_from_path(config_file) if config_file is not None else load_config_from_directory(directory)
    files = find_files(directory, config.include)
    return compile_module(files, config.references, module_name_for(directory), config.lark_options)

def load_from_file(path):
    if path.endswith(LARK_SUFFIX):
        return compile_module([path], (), module_name_for(path), Config().lark_options)
    name = module_name_for(path)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise GrammarModuleNotFoundError("{} is not a loadable module file".format(path))
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        del sys.modules[name]
        raise CompilationError([_diagnostic(e.filename or path, e.lineno, e.offset, e.msg)]) from e
    except (OSError, ImportError) as e:
        del sys.modules[name]
        raise GrammarModuleNotFoundError("Cannot load module file '{}': {}".format(path, e)) from e
    except Exception as e:
        del sys.modules[name]
        raise CompilationError([_diagnostic(path, None, None, "{}: {}".format(type(e).__name__, e))]) from e
    return module

def load_from_import(module_name):
    importlib.invalidate_caches()
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if e.name is not None and module_name != e.name and not module_name.startswith(e.name + "."):
            raise
        raise GrammarModuleNotFoundError("{} is not a directory nor a module file name.".format(module_name)) from e

def load_grammar_module(source, config_file=None):
    if os.path.isdir(source):
        logger.debug("Compiling grammar module from directory %s", source)
        return load_from_directory(source, config_file)
    if os.path.isfile(source):
        logger.debug("Loading grammar module from file %s", source)
        return load_from_file(source)
    if re.fullmatch(r"[A-Za-z_][\w]*(\.[A-Za-z_][\w]*)*", source):
        logger.debug("Importing grammar module %s", source)
        return load_from_import(source)
    raise GrammarModuleNotFoundError("{} is not a directory nor a module file name.".format(source))
