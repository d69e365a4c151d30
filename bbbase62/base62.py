import logging
import string
import numbers

log = logging.getLogger('bbbase62')

'''
Base62 encoding of nonnegative 64-bit integers.

The alphabet is configurable, the default is 0-9, a-z, A-Z:

>>> codec = Base62()
>>> codec.encode(1673)
'qZ'
>>> codec.decode('qZ')
1673

Zero encodes to the empty string, and the empty string decodes to zero.

Decoding follows signed 64-bit arithmetic: magnitudes above MAX_VALUE
silently wrap around unless the codec is created with `strict=True`, in
which case RangeExceeded is raised.
'''

BASE = 62

MAX_VALUE = 2 ** 63 - 1

ALPHABETS = {
    'default': string.digits + string.ascii_lowercase + string.ascii_uppercase,
    'alternate': string.ascii_lowercase + string.ascii_uppercase + string.digits,
    'inverted': string.digits + string.ascii_uppercase + string.ascii_lowercase,
}

DEFAULT_ALPHABET = ALPHABETS['default']


class Base62Error(ValueError):
    pass


class InvalidAlphabet(Base62Error):

    """ Raised when an alphabet does not hold exactly 62 characters, or
    holds a character twice while uniqueness is enforced.
    """
    pass


class InvalidInput(Base62Error):

    """ Raised when encoding a negative value or decoding a string with
    characters that are not in the alphabet.
    """
    pass


class RangeExceeded(InvalidInput):

    """ Raised for values outside 0 .. MAX_VALUE: always by encode, and by
    decode on strict codecs.
    """
    pass


def get_alphabet(name):
    '''Returns the characters of a named alphabet.'''
    try:
        return ALPHABETS[name]
    except KeyError:
        raise InvalidAlphabet('Unknown alphabet %r, choose one of: %s'
                              % (name, ', '.join(sorted(ALPHABETS))))


def resolve_alphabet(alphabet):
    '''Returns the characters for a preset name, any other alphabet unchanged.'''
    if isinstance(alphabet, str) and alphabet in ALPHABETS:
        return get_alphabet(alphabet)
    return alphabet


def _wrap_int64(num):
    return (num + 2 ** 63) % 2 ** 64 - 2 ** 63


class Alphabet(object):

    """
    The ordered 62 characters of a Base62 numbering system.

    The position of a character is its digit value. Instances are
    immutable, compare equal by their characters and can be shared.

    Duplicate characters make decoding ambiguous; they are accepted
    (the first occurrence wins when decoding) unless `unique=True`.
    """

    __slots__ = ('_characters', '_digits')

    def __init__(self, characters, unique=False):
        if isinstance(characters, Alphabet):
            characters = characters.characters
        elif not isinstance(characters, str):
            characters = ''.join(characters)

        if len(characters) != BASE:
            raise InvalidAlphabet('Invalid string length, must be %d.' % BASE)

        digits = {}
        for value, ch in enumerate(characters):
            digits.setdefault(ch, value)

        if len(digits) != BASE:
            duplicates = sorted(set(ch for ch in characters if characters.count(ch) > 1))
            if unique:
                raise InvalidAlphabet('Duplicate character(s) in alphabet: %s' % ''.join(duplicates))
            log.warning('Alphabet has duplicate character(s) %r, decoding will be ambiguous',
                        ''.join(duplicates))

        object.__setattr__(self, '_characters', characters)
        object.__setattr__(self, '_digits', digits)

    def __setattr__(self, name, value):
        raise AttributeError('Alphabet is immutable')

    def __delattr__(self, name):
        raise AttributeError('Alphabet is immutable')

    @property
    def characters(self):
        return self._characters

    @property
    def unique(self):
        '''True if every character appears only once.'''
        return len(self._digits) == BASE

    def digit(self, ch):
        '''The digit value of `ch`, or None if it is not in the alphabet.'''
        return self._digits.get(ch)

    def __getitem__(self, value):
        return self._characters[value]

    def __contains__(self, ch):
        return ch in self._digits

    def __len__(self):
        return BASE

    def __iter__(self):
        return iter(self._characters)

    def __eq__(self, other):
        if isinstance(other, Alphabet):
            return self._characters == other._characters
        return NotImplemented

    def __hash__(self):
        return hash(self._characters)

    def __str__(self):
        return self._characters

    def __repr__(self):
        return 'Alphabet(%r)' % self._characters


class Base62(object):

    """
    Converts nonnegative integers to Base62 strings and back.

    `alphabet` may be None (the default alphabet), the name of one of
    ALPHABETS, any 62 characters, or an Alphabet.

    Set `strict=True` to have decode raise RangeExceeded instead of
    wrapping around when a string is larger than MAX_VALUE, and
    `unique=True` to reject alphabets with duplicate characters.
    """

    def __init__(self, alphabet=None, strict=False, unique=False):
        if alphabet is None:
            alphabet = DEFAULT_ALPHABET
        else:
            alphabet = resolve_alphabet(alphabet)

        if not isinstance(alphabet, Alphabet) or (unique and not alphabet.unique):
            alphabet = Alphabet(alphabet, unique=unique)

        if alphabet.characters != DEFAULT_ALPHABET:
            log.debug('Using custom base62 alphabet %s', alphabet.characters)

        self._alphabet = alphabet
        self._strict = bool(strict)

    @property
    def alphabet(self):
        return self._alphabet

    @property
    def strict(self):
        return self._strict

    def encode(self, num):
        '''Encode number in base62, returns a string.'''
        if isinstance(num, bool) or not isinstance(num, numbers.Integral):
            raise TypeError('can only encode integers, not %s' % type(num).__name__)
        if num < 0:
            raise InvalidInput('value must be nonnegative')
        if num > MAX_VALUE:
            raise RangeExceeded('value must not exceed %d' % MAX_VALUE)

        chars = self._alphabet
        digits = []
        while num:
            num, rem = divmod(num, BASE)
            digits.append(chars[rem])
        return ''.join(reversed(digits))

    def decode(self, string):
        '''Decode a base62 string to a number.'''
        if not isinstance(string, str):
            raise TypeError('can only decode str, not %s' % type(string).__name__)

        loc = self._alphabet.digit
        num = 0

        for ch in string:
            value = loc(ch)
            if value is None:
                raise InvalidInput('invalid character(s) in string: %s' % ch)
            num = num * BASE + value

        if num > MAX_VALUE:
            if self._strict:
                raise RangeExceeded('%r exceeds the maximum value %d' % (string, MAX_VALUE))
            return _wrap_int64(num)
        return num

    def __repr__(self):
        return 'Base62(%r, strict=%r)' % (self._alphabet.characters, self._strict)


default_codec = Base62()


def encode(num):
    '''Encode number in base62 with the default alphabet.'''
    return default_codec.encode(num)


def decode(string):
    '''Decode a base62 string with the default alphabet.'''
    return default_codec.decode(string)
