import logging
import yaml
import jsonschema

import tornado.options
import tornado.log
from tornado.util import ObjectDict
from bbbase62 import config as le_config
from bbbase62.base62 import Base62, ALPHABETS, BASE, resolve_alphabet


log = logging.getLogger(__name__)

DEFAULT_ALPHABET = 'default'
DEFAULT_STRICT = False
DEFAULT_UNIQUE = False

CONFIG_SCHEMA = {
    "title": "BBBase62 config",
    "type": "object",
    "properties": {
        "base62": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "alphabet": {
                    "type": "string"
                },
                "strict": {
                    "type": "boolean"
                },
                "unique": {
                    "type": "boolean"
                }
            },
            "required": ["alphabet", "strict", "unique"]
        }
    },
    "required": ["base62"]
}

_codecs = {}


class ConfigError(Exception):

    """ Raised when the configuration is missing, unreadable or invalid.
    """
    pass


def setup(args=None):
    """
    setup the base62 commandline options and parse them all

    returns the arguments that were not parsed
    """
    parser = tornado.options.OptionParser()
    parser.define("alphabet", default=None, type=str,
                  help="name of a preset alphabet (%s) or 62 characters" % ', '.join(sorted(ALPHABETS)))
    parser.define("strict", default=None, type=bool, help="raise on decode overflow instead of wrapping around")
    parser.define("unique", default=None, type=bool, help="reject alphabets with duplicate characters")
    parser.define("config", default=None, help='Config file', type=str)
    not_parsed = parser.parse_command_line(args)

    setup_global_config(alphabet=parser.alphabet,
                        strict=parser.strict,
                        unique=parser.unique,
                        config=parser.config)

    return not_parsed


def find_first(array):
    return next(item for item in array if item is not None)


def override_config(config, override):
    '''Overrides the given config by command line options'''

    if config.get('base62') is None:
        config['base62'] = {}

    # Priorities:
    # 1. command line arg
    # 2. config file
    # 3. hardcoded default
    base62_cfg = config['base62']
    alphabet = find_first([override.get('alphabet'), base62_cfg.get('alphabet'), DEFAULT_ALPHABET])
    strict = find_first([override.get('strict'), base62_cfg.get('strict'), DEFAULT_STRICT])
    unique = find_first([override.get('unique'), base62_cfg.get('unique'), DEFAULT_UNIQUE])
    base62_cfg.update(dict(alphabet=alphabet, strict=strict, unique=unique))


def setup_global_config(**kwargs):
    '''Reads the yaml config file and installs it globally as
    `bbbase62.config`.'''
    config_path = kwargs.pop('config', None)
    if config_path is not None:
        config = read_config(config_path)
    else:
        config = {}
    override_config(config, kwargs)

    validate_config(config)

    # Update global config object
    deep_copy(le_config, config)
    log.info('Using base62 alphabet %s (strict=%s)',
             config['base62']['alphabet'], config['base62']['strict'])


def deep_copy(obj_cfg, src_dict):
    for key in src_dict.keys():
        val = src_dict[key]
        if isinstance(val, dict):
            new_val = ObjectDict()
            deep_copy(new_val, val)
        else:
            new_val = val
        obj_cfg[key] = new_val


def read_config(config_path):
    '''Reads the config yaml.'''
    try:
        config = parse_config(config_path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError('Failed loading config %s: %s' % (config_path, e))
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError('Config %s must be a mapping' % config_path)
    return config


def parse_config(config_yaml_path):
    '''Parses the config yaml file'''
    with open(config_yaml_path, 'r', encoding='utf-8') as fd:
        config = yaml.safe_load(fd)
    return config


def validate_config(config):
    if config is None:
        raise ConfigError('Config is empty')

    try:
        jsonschema.validate(config, CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        field = '.'.join(str(p) for p in e.path)
        msg = "%s: %s" % (field, e.message) if field \
              else e.message
        raise ConfigError(msg)

    base62_cfg = config['base62']
    characters = resolve_alphabet(base62_cfg['alphabet'])
    if len(characters) != BASE:
        raise ConfigError('base62.alphabet: must be one of %s or exactly %d characters'
                          % (', '.join(sorted(ALPHABETS)), BASE))
    if len(set(characters)) != BASE:
        if base62_cfg['unique']:
            raise ConfigError('base62.alphabet: duplicate characters are not allowed')
        tornado.log.gen_log.warning('Alphabet has duplicate characters, decoding will be ambiguous.')
    if not base62_cfg['strict']:
        tornado.log.gen_log.warning('Decode overflow wraps around silently, set base62.strict for production.')
    return True


def get_codec(config=None):
    '''Returns the codec for the given config, or for `bbbase62.config`.

    Codecs are shared between callers with the same settings.'''
    if config is None:
        config = le_config
    base62_cfg = config.get('base62') or {}
    key = (base62_cfg.get('alphabet', DEFAULT_ALPHABET),
           bool(base62_cfg.get('strict', DEFAULT_STRICT)),
           bool(base62_cfg.get('unique', DEFAULT_UNIQUE)))

    codec = _codecs.get(key)
    if codec is None:
        codec = _codecs.setdefault(key, Base62(*key))
    return codec
