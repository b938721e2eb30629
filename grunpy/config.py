import os
import json
import logging
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "grunpy.json"
DEFAULT_INCLUDE = ("*.py", "*.lark")
RESERVED_LARK_OPTIONS = ("parser", "lexer", "start", "tree_class")

class Config:
    def __init__(self, include=None, references=None, lark_options=None, path=None):
        self.include = list(include) if include is not None else list(DEFAULT_INCLUDE)
        self.references = list(references) if references is not None else []
        self.lark_options = dict(lark_options) if lark_options is not None else {}
        self.path = path

    @classmethod
    def from_dict(cls, data, path=None):
        if not isinstance(data, dict):
            raise ConfigError("Config '{}' must hold a JSON object".format(path))
        unknown = set(data.keys()) - {"include", "references", "lark_options"}
        if unknown:
            logger.warning("Ignoring unknown config keys in '%s': %s", path, sorted(unknown))
        include = data.get("include")
        if isinstance(include, str):
            include = [include]
        references = data.get("references")
        lark_options = data.get("lark_options")
        if include is not None and not _is_str_list(include):
            raise ConfigError("'include' in '{}' must be a list of glob patterns".format(path))
        if references is not None and not _is_str_list(references):
            raise ConfigError("'references' in '{}' must be a list of strings".format(path))
        if lark_options is not None:
            if not isinstance(lark_options, dict):
                raise ConfigError("'lark_options' in '{}' must be an object".format(path))
            reserved = sorted(set(lark_options.keys()) & set(RESERVED_LARK_OPTIONS))
            if reserved:
                raise ConfigError("'lark_options' in '{}' cannot set {}".format(path, reserved))
        return cls(include=include, references=references, lark_options=lark_options, path=path)

    def __repr__(self):
        return "Config(include={}, references={}, lark_options={})".format(self.include, self.references, self.lark_options)

def _is_str_list(value):
    return isinstance(value, list) and all(isinstance(x, str) for x in value)

def load_config_from_path(path):
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError("Cannot read config file '{}': {}".format(path, e.strerror or e)) from e
    except json.JSONDecodeError as e:
        raise ConfigError("Malformed config file '{}': {}".format(path, e)) from e
    logger.debug("Loaded config from %s", path)
    return Config.from_dict(data, path=path)

def load_config_from_directory(directory):
    path = os.path.join(directory, CONFIG_FILE_NAME)
    if os.path.isfile(path):
        return load_config_from_path(path)
    logger.debug("No %s in %s, using default config", CONFIG_FILE_NAME, directory)
    return Config()
