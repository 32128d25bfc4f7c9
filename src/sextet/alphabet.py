"""
This module provides the Alphabet class which maps 6-bit values to base64 symbols and back.

Values 0-61 always map to the conventional symbols (A-Z, a-z, 0-9).
Values 62 and 63 and the padding symbol are chosen when the Alphabet is constructed and do not change afterwards.
Symbols are handled as integer byte values (0-255), the same way indexing a bytes object yields them.

>>> STANDARD.encode_symbol(0), STANDARD.encode_symbol(26), STANDARD.encode_symbol(52)
(65, 97, 48)
>>> chr(STANDARD.encode_symbol(62)), chr(STANDARD.encode_symbol(63))
('+', '/')
>>> URL_SAFE.decode_symbol(ord('_'))
63
>>> STANDARD.decode_symbol(ord('='))
-1
"""
from .errors import ConfigurationError

FIXED_SYMBOLS = b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789'
DEFAULT_SYMBOL_62 = ord('+')
DEFAULT_SYMBOL_63 = ord('/')
DEFAULT_PADDING = ord('=')

#'=' ends decoding regardless of the configured padding symbol
PAD_SYMBOL = ord('=')

#every byte at or below this value is formatting noise to the decoder
MAX_FORMATTING_BYTE = 0x20

NOT_FOUND = -1

def symbol_value(symbol,name,allow_disabled=False):
    """
    Normalizes a configured symbol to its integer byte value.

    A symbol can be given as a one character str, a one byte bytes/bytearray, or an int from 0 to 255.
    If allow_disabled is True, then None, 0 and empty strings are accepted and normalized to 0.

    >>> symbol_value('+','symbol62')
    43
    >>> symbol_value(b'-','symbol62')
    45
    >>> symbol_value(None,'padding',allow_disabled=True)
    0
    """
    if allow_disabled and (symbol is None or symbol == 0 or symbol == '' or symbol == b''):
        return 0
    if isinstance(symbol,str):
        if len(symbol) != 1 or ord(symbol) > 255:
            raise ConfigurationError('%s must be a single byte character: %s' % (name,repr(symbol)))
        return ord(symbol)
    if isinstance(symbol,(bytes,bytearray)):
        if len(symbol) != 1:
            raise ConfigurationError('%s must be exactly one byte: %s' % (name,repr(symbol)))
        return symbol[0]
    if isinstance(symbol,int) and not isinstance(symbol,bool):
        if not 0 < symbol <= 255:
            raise ConfigurationError('%s must be between 1 and 255: %d' % (name,symbol))
        return symbol
    raise ConfigurationError('%s must be a str, bytes or int, not %s' % (name,repr(type(symbol))))

class Alphabet(object):
    """
    A base64 alphabet: 64 symbols plus an optional padding symbol.

    encode_table is a 64 byte lookup from 6-bit value to symbol.
    decode_table is a 256 entry lookup from symbol to 6-bit value, holding NOT_FOUND for everything else (including the padding symbol).

    A padding of None/0 disables padding on encode. Decoding still stops at a literal '=' in that case.

    >>> a = Alphabet('*','.',None)
    >>> a
    Alphabet(symbol62='*',symbol63='.',padding=None)
    >>> a.padded
    False
    >>> a.decode_symbol(ord('.'))
    63
    >>> Alphabet('A','/')
    Traceback (most recent call last):
        ...
    sextet.errors.ConfigurationError: symbol62 'A' is already one of the fixed base64 symbols
    """
    def __init__(self,symbol62=DEFAULT_SYMBOL_62,symbol63=DEFAULT_SYMBOL_63,padding=DEFAULT_PADDING):
        self.symbol62 = symbol_value(symbol62,'symbol62')
        self.symbol63 = symbol_value(symbol63,'symbol63')
        self.padding = symbol_value(padding,'padding',allow_disabled=True)

        for name,value in (('symbol62',self.symbol62),('symbol63',self.symbol63)):
            if value in FIXED_SYMBOLS:
                raise ConfigurationError('%s %s is already one of the fixed base64 symbols' % (name,repr(chr(value))))
            if value <= MAX_FORMATTING_BYTE:
                raise ConfigurationError('%s %s would be skipped as whitespace when decoding' % (name,repr(chr(value))))
            if value == PAD_SYMBOL or value == self.padding:
                raise ConfigurationError('%s %s collides with a padding symbol' % (name,repr(chr(value))))
        if self.symbol62 == self.symbol63:
            raise ConfigurationError('symbol62 and symbol63 must differ: %s' % repr(chr(self.symbol62)))
        if self.padding:
            if self.padding <= MAX_FORMATTING_BYTE:
                raise ConfigurationError('padding %s would be skipped as whitespace when decoding' % repr(chr(self.padding)))
            if self.padding in FIXED_SYMBOLS:
                raise ConfigurationError('padding %s is already one of the fixed base64 symbols' % repr(chr(self.padding)))

        self.encode_table = FIXED_SYMBOLS + bytes([self.symbol62,self.symbol63])
        self.decode_table = [NOT_FOUND]*256
        for value,symbol in enumerate(self.encode_table):
            self.decode_table[symbol] = value

    @property
    def padded(self):
        """
        True if padding symbols are written when encoding a trailing partial group.
        """
        return self.padding != 0

    def encode_symbol(self,value):
        """
        Returns the symbol byte for a 6-bit value. Only the low 6 bits of value are used.
        """
        return self.encode_table[value & 0x3f]

    def decode_symbol(self,symbol):
        """
        Returns the 6-bit value of a symbol byte, or NOT_FOUND if the byte is not part of this alphabet.
        """
        return self.decode_table[symbol & 0xff]

    def __eq__(self,other):
        if not isinstance(other,Alphabet):
            return NotImplemented
        return (self.symbol62,self.symbol63,self.padding) == (other.symbol62,other.symbol63,other.padding)

    def __hash__(self):
        return hash((self.symbol62,self.symbol63,self.padding))

    def __repr__(self):
        padding = repr(chr(self.padding)) if self.padding else 'None'
        return 'Alphabet(symbol62=%s,symbol63=%s,padding=%s)' % (repr(chr(self.symbol62)),repr(chr(self.symbol63)),padding)

STANDARD = Alphabet()
URL_SAFE = Alphabet('-','_')
