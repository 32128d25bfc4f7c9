"""
Byte sources with awkward behaviour, used to drive the codec through its buffer boundaries and failure paths.
"""
import io

class TrickleReader(object):
    """
    Returns at most chunk bytes per read and has no readinto().
    """
    def __init__(self,data,chunk=1):
        self.data = bytes(data)
        self.pos = 0
        self.chunk = chunk
        self.closed = False
    def read(self,n=-1):
        n = min(n,self.chunk)
        result = self.data[self.pos:self.pos+n]
        self.pos += len(result)
        return result
    def close(self):
        self.closed = True

class PartialWriter(io.RawIOBase):
    """
    Raw sink that accepts at most chunk bytes per write() call.
    """
    def __init__(self,chunk=3):
        self.chunk = chunk
        self.written = bytearray()
        self.write_calls = 0
    def writable(self):
        return True
    def write(self,b):
        self.write_calls += 1
        n = min(len(b),self.chunk)
        self.written += bytes(b[:n])
        return n

class FailingSink(object):
    """
    Sink whose write, flush and close can be made to fail.
    """
    def __init__(self,fail_write=True,fail_flush=False,fail_close=False):
        self.fail_write = fail_write
        self.fail_flush = fail_flush
        self.fail_close = fail_close
        self.closed = False
        self.written = bytearray()
    def write(self,b):
        if self.fail_write:
            raise OSError('disk full')
        self.written += b
        return len(b)
    def flush(self):
        if self.fail_flush:
            raise OSError('flush failed')
    def close(self):
        self.closed = True
        if self.fail_close:
            raise OSError('close failed')
