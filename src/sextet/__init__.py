"""
Key Ideas:
    (1) A byte source is anything bytes can be read from or written to: a file opened in binary mode, a BytesIO, a socket file, or a bytes object to decode.
    (2) A symbol is one byte of base64 text standing for a 6-bit value.
    (3) A group is 24 bits: three bytes on the binary side, four symbols on the base64 side.
    (4) An alphabet is the mapping between 6-bit values and symbols. Values 0-61 are always A-Z, a-z, 0-9. Values 62 and 63 and the padding symbol can be chosen.
    (5) A trailing group is the group left over when the data is not a multiple of three bytes. Padding symbols fill it out to four symbols.
    (6) A formatting byte is any byte at or below 0x20 (space, CR, LF, tab, other control bytes). The decoder skips them wherever they appear.

The purpose of this package is to encode and decode base64 incrementally over a byte source, without holding the payload in memory.

Base64Stream API:

    Writing (encoding):
        with Base64Stream(f) as s:
            s.write(b'...')       #whole groups are encoded and buffered
            s.write_byte(0x41)    #single bytes go through the same group
            s.flush()             #buffered symbols go to f; a partial group stays behind
        #close() writes the trailing group and padding, then closes f

    Reading (decoding):
        with Base64Stream(f) as s:
            while s.has_more():
                chunk = s.read(4096)
            s.read_byte()         #-1 (END_OF_DATA) at the end

        read_into(buffer,offset,length) fills a bytearray in place and returns the number of bytes decoded.
        Decoding ends at the first '=' (or configured padding symbol) or at the end of the byte source. Anything after the padding is not read.

    Options:
        symbol62='+', symbol63='/' = symbols for the values 62 and 63 (e.g. '-' and '_' for URL safe base64)
        padding='=' = padding symbol; None disables padding when encoding. A literal '=' still ends decoding.
        line_length=0 = insert CRLF after this many symbols, rounded up to a multiple of 4 (76 for MIME)
        buffer_size=0 = internal buffer size per direction; below 6 the default of 4096 is used
        leave_open=False = do not close the byte source on close()
        partial_bytes=True = decode a lone trailing symbol to a byte holding its 6 bits (False drops it)

    Not supported:
        seek(), tell(), truncate() and len() raise UnsupportedOperation. Use has_more() instead of a length.

One shot helpers:
    encode(data,**options) -> bytes
    decode(data,**options) -> bytes
    codecs.encode(data,'sextet') / codecs.decode(data,'sextet')

>>> encode(b'any carnal pleas', line_length=8)
b'YW55IGNh\\r\\ncm5hbCBw\\r\\nbGVhcw=='
>>> decode(_)
b'any carnal pleas'
"""
from .errors import *
from .alphabet import *
from .groups import *
from .transport import *
from .encoder import *
from .decoder import *
from .stream import *
from .codec import *

__version__ = '0.0.1'
