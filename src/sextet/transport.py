"""
The purpose of this module is to provide the Transport class, a thin adapter around the byte source that a base64 stream reads from and writes to.

The adapter only exposes chunked reads, chunked writes, flush and close. Seeking and lengths are not part of it.

>>> t = Transport(b'TWFu')
>>> buffer = bytearray(8)
>>> t.read_chunk(buffer), bytes(buffer[:4])
(4, b'TWFu')
>>> t.read_chunk(buffer)
0
"""
import io
import logarhythm
from .errors import ConfigurationError, UseAfterClose

logger = logarhythm.getLogger('sextet.transport')
logger.format = logarhythm.build_format(time=None,level=False)

class Transport(object):
    """
    Wraps a binary file-like object (or a bytes-like object, which is wrapped in a BytesIO).

    The byte source is used as given: reads and writes happen at its current position and nothing is seeked.
    Once close() has been called, every operation raises UseAfterClose.
    """
    def __init__(self,byte_source):
        if byte_source is None:
            raise ConfigurationError('Underlying byte source cannot be None')
        if isinstance(byte_source,(bytes,bytearray,memoryview)):
            byte_source = io.BytesIO(byte_source)
        elif isinstance(byte_source,io.TextIOBase):
            raise ConfigurationError('Byte source must be opened in binary mode, not text mode: %s' % repr(byte_source))
        elif not (hasattr(byte_source,'read') or hasattr(byte_source,'write')):
            raise ConfigurationError('Incompatible byte source: %s' % repr(byte_source))
        mode = getattr(byte_source,'mode',None)
        if isinstance(mode,str) and 'b' not in mode:
            raise ConfigurationError('File-like object must be opened in binary mode i.e. must have "b": mode = %s' % mode)
        self.byte_source = byte_source

    @property
    def closed(self):
        return self.byte_source is None

    def check_open(self):
        if self.byte_source is None:
            raise UseAfterClose('The underlying byte source has already been released')

    def _source(self):
        self.check_open()
        return self.byte_source

    def read_chunk(self,buffer):
        """
        Reads up to len(buffer) bytes into buffer and returns how many were read.
        Zero means the source is exhausted.
        """
        source = self._source()
        #readinto1 does at most one raw read
        readinto = getattr(source,'readinto1',None) or getattr(source,'readinto',None)
        if readinto is not None:
            n = readinto(buffer)
        else:
            data = source.read(len(buffer))
            n = len(data) if data is not None else None
            if n:
                buffer[:n] = data
        if n is None or n < 0:
            return 0
        return n

    def write_chunk(self,buffer,length):
        """
        Writes the first length bytes of buffer to the byte source.
        Sources that accept only part of a write (raw file objects) are written to until all bytes are taken.
        """
        source = self._source()
        data = bytes(buffer[:length])
        written = 0
        while written < length:
            n = source.write(data[written:])
            if n is None:
                #a sink returning None is taken to have accepted everything
                break
            if n <= 0:
                raise OSError('Byte source accepted no bytes (%d of %d written)' % (written,length))
            written += n

    def flush(self):
        source = self._source()
        if hasattr(source,'flush'):
            source.flush()

    def close(self):
        """
        Closes the byte source and releases it. Closing an already released transport does nothing.
        """
        source = self.byte_source
        self.byte_source = None
        if source is not None and hasattr(source,'close'):
            logger.debug('closing byte source %s' % type(source).__name__)
            source.close()

    def release(self):
        """
        Releases the byte source without closing it.
        """
        self.byte_source = None

    def readable(self):
        """
        Pass through to the byte source readable() method (False once released)
        """
        if self.byte_source is None:
            return False
        if hasattr(self.byte_source,'readable'):
            return self.byte_source.readable()
        return hasattr(self.byte_source,'read')

    def writable(self):
        """
        Pass through to the byte source writable() method (False once released)
        """
        if self.byte_source is None:
            return False
        if hasattr(self.byte_source,'writable'):
            return self.byte_source.writable()
        return hasattr(self.byte_source,'write')
