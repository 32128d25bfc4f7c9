"""
The purpose of this module is to provide Base64Decoder, the read half of a base64 stream.

Symbols are pulled from the transport through an input buffer, skipping every byte at or below 0x20 (spaces, CR, LF and other control bytes).
Four symbols are decoded into an InputBitGroup of three bytes which are handed out one at a time or copied in bulk.

Decoding stops at the first padding symbol ('=' always, and the configured padding symbol too) or when the transport runs dry.
A short trailing group yields the complete bytes it holds: two symbols give one byte, three symbols give two bytes.

>>> d = Base64Decoder(Transport(b'TW\\r\\nFu TQ=='))
>>> d.read()
b'ManM'
>>> d.has_more(), d.read_byte()
(False, -1)

Padding ends decoding even if more data follows it:

>>> Base64Decoder(Transport(b'TWE=TWFu')).read()
b'Ma'
"""
import logarhythm
from .alphabet import STANDARD, PAD_SYMBOL, MAX_FORMATTING_BYTE, NOT_FOUND
from .encoder import buffer_size_or_default
from .groups import InputBitGroup
from .transport import Transport

logger = logarhythm.getLogger('sextet.decoder')
logger.format = logarhythm.build_format(time=None,level=False)

END_OF_DATA = -1

#input_size value once the transport is done for good
EXHAUSTED = -1

#number of whole bytes held by a trailing group of 2, 3 or 4 symbols
BYTES_FOR_SYMBOLS = (0,0,1,2,3)

class Base64Decoder(object):
    """
    Decodes base64 symbols read from a Transport.

    If partial_bytes is True, a lone trailing symbol (6 bits, not enough for a byte) is still returned as one byte with those bits at the top and the low 2 bits zero.
    If partial_bytes is False, it is dropped like the leftover bits of the other short groups.

    Bytes above 0x20 that are neither alphabet symbols nor padding are read as the value zero.
    """
    def __init__(self,transport,alphabet=None,buffer_size=0,partial_bytes=True):
        self.transport = transport
        self.alphabet = alphabet if alphabet is not None else STANDARD
        self.partial_bytes = partial_bytes
        self.input_buffer = bytearray(buffer_size_or_default(buffer_size))
        self.input_size = 0
        self.input_offset = 0
        self.group = InputBitGroup()
        #count of non-alphabet symbols decoded as zero
        self.unrecognized = 0

    @property
    def exhausted(self):
        """
        True once the transport has run dry or a padding symbol has been read. Bytes may still be pending in the group.
        """
        return self.input_size == EXHAUSTED

    def _fill(self):
        """
        Refills the input buffer from the transport. Returns False (and marks the input exhausted) if nothing more can be read.
        """
        n = self.transport.read_chunk(self.input_buffer)
        if n <= 0:
            self._exhaust('transport exhausted')
            return False
        self.input_size = n
        self.input_offset = 0
        return True

    def _peek_symbol(self):
        """
        Returns the next symbol byte without consuming it, skipping formatting bytes on the way.
        A padding symbol is consumed, marks the input exhausted and gives END_OF_DATA.
        """
        if self.input_size == EXHAUSTED:
            return END_OF_DATA
        buffer = self.input_buffer
        while True:
            if self.input_offset >= self.input_size and not self._fill():
                return END_OF_DATA
            b = buffer[self.input_offset]
            if b > MAX_FORMATTING_BYTE:
                break
            self.input_offset += 1
        if b == PAD_SYMBOL or (self.alphabet.padding and b == self.alphabet.padding):
            self.input_offset += 1
            self._exhaust('padding symbol %s ends the base64 data' % repr(chr(b)))
            return END_OF_DATA
        return b

    def _exhaust(self,reason):
        """
        Marks the input as done for good. Logs once per decoder, with the number of unrecognized symbols seen.
        """
        self.input_size = EXHAUSTED
        if self.unrecognized:
            logger.debug('%s; %d unrecognized symbol(s) were read as zero' % (reason,self.unrecognized))
        else:
            logger.debug(reason)

    def _next_value(self):
        """
        Consumes the next symbol and returns its 6-bit value, or END_OF_DATA.
        """
        b = self._peek_symbol()
        if b == END_OF_DATA:
            return END_OF_DATA
        self.input_offset += 1
        value = self.alphabet.decode_table[b]
        if value == NOT_FOUND:
            self.unrecognized += 1
            if self.unrecognized == 1:
                logger.debug('unrecognized symbol 0x%02x read as zero' % b)
            return 0
        return value

    def _read_group(self):
        """
        Reads up to four symbols. Returns the 24-bit value (missing symbols are zero bits) and how many symbols were read.
        """
        bits = 0
        for count in range(4):
            value = self._next_value()
            if value == END_OF_DATA:
                return bits,count
            bits |= value << (18 - 6*count)
        return bits,4

    def _load_group(self,bits,count):
        """
        Stores a freshly read group and returns its first byte, or END_OF_DATA if it holds none.
        """
        group = self.group
        if count == 0:
            group.clear()
            return END_OF_DATA
        if count == 1:
            group.clear()
            if not self.partial_bytes:
                logger.debug('dropping lone trailing symbol')
                return END_OF_DATA
            logger.debug('returning lone trailing symbol as a partial byte')
            return (bits >> 16) & 0xff
        group.load(bits,BYTES_FOR_SYMBOLS[count])
        return group.pop()

    def has_more(self):
        """
        Returns True if another read would produce at least one byte.
        May block while the transport is read to find out.

        With partial_bytes False, a lone trailing symbol counts as data here but reads as nothing.
        """
        self.transport.check_open()
        if self.group.pending():
            return True
        return self._peek_symbol() != END_OF_DATA

    def read_byte(self):
        """
        Returns the next decoded byte, or END_OF_DATA (-1).
        """
        self.transport.check_open()
        if self.group.pending():
            return self.group.pop()
        bits,count = self._read_group()
        return self._load_group(bits,count)

    def read_into(self,buffer,offset=0,length=None):
        """
        Decodes up to length bytes into buffer starting at offset and returns how many were written.
        Fewer bytes than requested are only returned at the end of the data.

        Pending group bytes are handed out first. After that, whole groups are decoded straight into the buffer for the largest multiple of 3 that fits, and the last 1 or 2 bytes go through read_byte().

        >>> d = Base64Decoder(Transport(b'aGVsbG8gd29ybGQ='))
        >>> buffer = bytearray(16)
        >>> d.read_into(buffer,2,4), d.read_into(buffer,6,10)
        (4, 7)
        >>> bytes(buffer[2:13])
        b'hello world'
        """
        self.transport.check_open()
        if length is None:
            length = len(buffer) - offset
        if offset < 0 or length < 0 or offset + length > len(buffer):
            raise ValueError('offset %d and length %d do not fit in a buffer of %d bytes' % (offset,length,len(buffer)))
        pos = offset
        end = offset + length
        group = self.group

        while group.pending() and pos < end:
            buffer[pos] = group.pop()
            pos += 1

        if self.input_size == EXHAUSTED:
            return pos - offset

        bulk_end = end - (end - pos) % 3
        while pos < bulk_end:
            bits,count = self._read_group()
            if count < 4:
                #the data ended inside this group; what is left of it is handed out below
                value = self._load_group(bits,count)
                if value != END_OF_DATA:
                    buffer[pos] = value
                    pos += 1
                break
            buffer[pos] = bits >> 16
            buffer[pos+1] = (bits >> 8) & 0xff
            buffer[pos+2] = bits & 0xff
            pos += 3

        while pos < end:
            value = self.read_byte()
            if value == END_OF_DATA:
                break
            buffer[pos] = value
            pos += 1
        return pos - offset

    def readinto(self,buffer):
        return self.read_into(buffer)

    def read(self,size=-1):
        """
        Returns up to size decoded bytes, or everything up to the end of the data if size is negative or None.
        """
        if size is not None and size >= 0:
            buffer = bytearray(size)
            n = self.read_into(buffer)
            del buffer[n:]
            return bytes(buffer)
        chunks = []
        chunk = bytearray(len(self.input_buffer))
        while True:
            n = self.read_into(chunk)
            if n == 0:
                break
            chunks.append(bytes(chunk[:n]))
        return b''.join(chunks)
