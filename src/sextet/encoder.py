"""
The purpose of this module is to provide Base64Encoder, the write half of a base64 stream.

Bytes are gathered three at a time into an OutputBitGroup. Each full group becomes four symbols in the output buffer, which is written to the transport in chunks.
A trailing group of one or two bytes is only written by finalize().

>>> import io
>>> sink = io.BytesIO()
>>> e = Base64Encoder(Transport(sink))
>>> e.write(b'Ma')
2
>>> sink.getvalue()
b''
>>> e.finalize()
>>> sink.getvalue()
b'TWE='
"""
import logarhythm
from .alphabet import STANDARD
from .groups import OutputBitGroup
from .transport import Transport

logger = logarhythm.getLogger('sextet.encoder')
logger.format = logarhythm.build_format(time=None,level=False)

DEFAULT_BUFFER_SIZE = 4096

#four symbols and a CRLF: the most a single group can add to the output buffer
MIN_BUFFER_SIZE = 6

def buffer_size_or_default(buffer_size):
    """
    >>> buffer_size_or_default(0), buffer_size_or_default(5), buffer_size_or_default(6)
    (4096, 4096, 6)
    """
    if buffer_size is None or buffer_size < MIN_BUFFER_SIZE:
        return DEFAULT_BUFFER_SIZE
    return buffer_size

def round_line_length(line_length):
    """
    Rounds a line length up to a whole number of groups (a multiple of 4). Zero or less disables wrapping.

    >>> round_line_length(76), round_line_length(74), round_line_length(1), round_line_length(0)
    (76, 76, 4, 0)
    """
    if not line_length or line_length <= 0:
        return 0
    return -(-line_length//4)*4

class Base64Encoder(object):
    """
    Encodes bytes written to it into base64 symbols written to a Transport.

    line_length > 0 inserts a CRLF after every line_length symbols (rounded up to a multiple of 4).
    The alphabet decides symbols 62 and 63 and the padding symbol; an unpadded alphabet writes no padding.
    """
    def __init__(self,transport,alphabet=None,line_length=0,buffer_size=0):
        self.transport = transport
        self.alphabet = alphabet if alphabet is not None else STANDARD
        self.line_length = round_line_length(line_length)
        self.line_size = 0
        self.output_buffer = bytearray(buffer_size_or_default(buffer_size))
        self.output_size = 0
        self.group = OutputBitGroup()

    def _drain(self):
        """
        Writes the buffered symbols to the transport.
        """
        if self.output_size > 0:
            self.transport.write_chunk(self.output_buffer,self.output_size)
            self.output_size = 0

    def _emit_group(self,bits):
        """
        Splits 24 bits into four symbols (most significant first) and appends them, followed by a CRLF when the line is full.
        """
        if self.output_size > len(self.output_buffer) - MIN_BUFFER_SIZE:
            self._drain()
        table = self.alphabet.encode_table
        buffer = self.output_buffer
        n = self.output_size
        buffer[n] = table[(bits >> 18) & 0x3f]
        buffer[n+1] = table[(bits >> 12) & 0x3f]
        buffer[n+2] = table[(bits >> 6) & 0x3f]
        buffer[n+3] = table[bits & 0x3f]
        n += 4
        if self.line_length > 0:
            self.line_size += 4
            if self.line_size >= self.line_length:
                buffer[n] = 13
                buffer[n+1] = 10
                n += 2
                self.line_size = 0
        self.output_size = n

    def write_byte(self,b):
        """
        Encodes a single byte. Only the low 8 bits of b are used.
        """
        self.transport.check_open()
        if self.group.push(b):
            self._emit_group(self.group.take())

    def write(self,data):
        """
        Encodes a bytes-like object and returns the number of bytes taken (always all of them).

        Bytes completing a partially filled group go through write_byte(), whole groups are packed directly and the last one or two bytes are left in the group for a later write or finalize().
        """
        self.transport.check_open()
        view = memoryview(data)
        if view.ndim != 1 or view.format != 'B':
            view = view.cast('B')
        pos = 0
        end = len(view)

        while self.group.step != 0 and pos < end:
            self.write_byte(view[pos])
            pos += 1

        bulk_end = end - (end - pos) % 3
        while pos < bulk_end:
            self._emit_group((view[pos] << 16) | (view[pos+1] << 8) | view[pos+2])
            pos += 3

        while pos < end:
            self.write_byte(view[pos])
            pos += 1
        return end

    def flush(self):
        """
        Writes every complete group to the transport and flushes it. A partial group stays where it is.
        """
        self.transport.check_open()
        self._drain()
        self.transport.flush()

    def finalize(self):
        """
        Writes out the trailing partial group with its padding, then flushes.

        One leftover byte gives two symbols and two padding symbols, two bytes give three symbols and one padding symbol.
        Calling it again, or on a released transport, does nothing harmful.
        Finalizing before the data is complete produces padding in the middle of the output.
        """
        if self.transport.closed:
            return
        step = self.group.step
        if step:
            symbols = step + 1
            padding = self.alphabet.padding
            pad_count = 3 - step if padding else 0
            if self.output_size > len(self.output_buffer) - (symbols + pad_count):
                self._drain()
            logger.debug('finalizing %d trailing byte(s) as %d symbol(s) and %d padding' % (step,symbols,pad_count))
            bits = self.group.take()
            table = self.alphabet.encode_table
            for i in range(symbols):
                self.output_buffer[self.output_size] = table[(bits >> (18 - 6*i)) & 0x3f]
                self.output_size += 1
            for i in range(pad_count):
                self.output_buffer[self.output_size] = padding
                self.output_size += 1
        self._drain()
        self.transport.flush()
