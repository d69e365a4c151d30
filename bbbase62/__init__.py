from tornado.util import ObjectDict

__version__ = '0.1.0'

# populated by bbbase62.main.setup_global_config
config = ObjectDict()

from bbbase62.base62 import (  # noqa: E402
    ALPHABETS, DEFAULT_ALPHABET, MAX_VALUE,
    Alphabet, Base62, Base62Error, InvalidAlphabet, InvalidInput, RangeExceeded,
    encode, decode, get_alphabet,
)
