"""
The purpose of this module is to provide Base64Stream, a two-way stream which encodes base64 on write and decodes it on read.

The write side and the read side use separate buffers and separate bit groups, so written data is never visible to reads of the same stream.
Positions and lengths are not supported: padding, line breaks and skipped whitespace make encoded and decoded offsets unrelated.

>>> import io
>>> sink = io.BytesIO()
>>> with Base64Stream(sink,leave_open=True) as s:
...     s.write(b'hello world')
11
>>> sink.getvalue()
b'aGVsbG8gd29ybGQ='
>>> with Base64Stream(sink.getvalue()) as s:
...     s.read()
b'hello world'
"""
import logarhythm
from .alphabet import Alphabet
from .decoder import Base64Decoder
from .encoder import Base64Encoder
from .errors import ConfigurationError, UnsupportedOperation
from .transport import Transport

logger = logarhythm.getLogger('sextet.stream')
logger.format = logarhythm.build_format(time=None,level=False)

class Base64Stream(object):
    """
    Wraps a binary byte source (file object, BytesIO, socket file, or a bytes object to decode).

    symbol62, symbol63, padding = alphabet customization (see sextet.alphabet.Alphabet). An Alphabet instance may be passed as alphabet instead.
    line_length = insert a CRLF after this many symbols, rounded up to a multiple of 4 (0 disables).
    buffer_size = size of each internal buffer between this stream and the byte source (below 6 selects 4096).
    leave_open = if True, close() does not close the byte source.
    partial_bytes = if True, a lone trailing symbol is decoded as a partial byte instead of dropped.

    Output is only complete once close() (or finalize()) has written the trailing group and its padding.
    Use it as a context manager or call close() explicitly; nothing is written on garbage collection.
    """
    def __init__(self,byte_source,symbol62='+',symbol63='/',padding='=',line_length=0,buffer_size=0,leave_open=False,partial_bytes=True,alphabet=None):
        self.transport = Transport(byte_source)
        if alphabet is None:
            alphabet = Alphabet(symbol62,symbol63,padding)
        elif (symbol62,symbol63,padding) != ('+','/','='):
            raise ConfigurationError('Give either an alphabet or symbol62/symbol63/padding, not both: %s' % repr(alphabet))
        self.alphabet = alphabet
        self.leave_open = leave_open
        self.encoder = Base64Encoder(self.transport,alphabet,line_length,buffer_size)
        self.decoder = Base64Decoder(self.transport,alphabet,buffer_size,partial_bytes)

    @property
    def closed(self):
        return self.transport.closed

    @property
    def line_length(self):
        return self.encoder.line_length

    def __enter__(self):
        return self

    def __exit__(self,exc_type,exc_value,exc_traceback):
        """
        The stream is closed when the context ends.
        """
        self.close()

    def close(self):
        """
        Writes the trailing group, flushes and closes the byte source (unless leave_open was given).

        Errors raised while doing so are logged and discarded. Call finalize() first to see them.
        Closing twice does nothing.
        """
        if self.transport.closed:
            return
        try:
            self.encoder.finalize()
        except Exception as e:
            logger.warning('discarding error while finalizing base64 output: %r' % e)
        try:
            if self.leave_open:
                self.transport.release()
            else:
                self.transport.close()
        except Exception as e:
            logger.warning('discarding error while closing byte source: %r' % e)
        finally:
            self.transport.release()
        self.encoder.output_buffer = bytearray()
        self.decoder.input_buffer = bytearray()

    def finalize(self):
        """
        Writes the trailing partial group and its padding and flushes, raising any transport error.
        No more data should be written after this.
        """
        self.encoder.finalize()

    def readable(self):
        return self.transport.readable()

    def writable(self):
        return self.transport.writable()

    def seekable(self):
        return False

    def write_byte(self,b):
        self.encoder.write_byte(b)

    def write(self,data):
        return self.encoder.write(data)

    def writelines(self,lines):
        for data in lines:
            self.encoder.write(data)

    def flush(self):
        self.encoder.flush()

    def has_more(self):
        """
        Substitute for a length: True if there is still data to read. Depending on the byte source this may block.
        """
        return self.decoder.has_more()

    def read_byte(self):
        return self.decoder.read_byte()

    def read(self,size=-1):
        return self.decoder.read(size)

    def readinto(self,buffer):
        return self.decoder.readinto(buffer)

    def read_into(self,buffer,offset=0,length=None):
        return self.decoder.read_into(buffer,offset,length)

    def seek(self,offset,whence=0):
        raise UnsupportedOperation('Position in base64 encoded stream is inconsistent with position in decoded stream')

    def tell(self):
        raise UnsupportedOperation('Position in base64 encoded stream is inconsistent with position in decoded stream')

    def truncate(self,size=None):
        raise UnsupportedOperation('Length of Base64Stream cannot be set')

    def __bool__(self):
        return True

    def __len__(self):
        raise UnsupportedOperation('Length of base64 encoded stream is inconsistent with length of decoded stream; use has_more()')
