"""
Convenience functions for encoding and decoding whole payloads, and a 'sextet' codec registered with the codecs module.

The keyword options are those of Base64Stream (symbol62, symbol63, padding, line_length, partial_bytes, alphabet, buffer_size).

>>> encode(b'Man'), encode(b'Ma'), encode(b'M')
(b'TWFu', b'TWE=', b'TQ==')
>>> decode(b'TWFu'), decode(b'TWE='), decode(b'TQ==')
(b'Man', b'Ma', b'M')
>>> encode(b'\\xfb\\xff', symbol62='-', symbol63='_', padding=None)
b'-_8'
>>> import codecs
>>> codecs.encode(b'hello world','sextet')
b'aGVsbG8gd29ybGQ='
>>> codecs.decode(_,'sextet')
b'hello world'
"""
import codecs
import io
from .stream import Base64Stream

def encode(data,**options):
    output = io.BytesIO()
    with Base64Stream(output,leave_open=True,**options) as stream:
        stream.write(data)
    return output.getvalue()

def decode(data,**options):
    with Base64Stream(bytes(data),**options) as stream:
        return stream.read()

def codec_encode(data,errors='strict'):
    return (encode(data),len(data))

def codec_decode(data,errors='strict'):
    return (decode(data),len(data))

class StreamWriter(codecs.StreamWriter):
    """
    Incremental writer: data written is encoded as it arrives, the trailing group is written by reset() or close().
    """
    def __init__(self,stream,errors='strict'):
        super(StreamWriter,self).__init__(stream,errors)
        self.base64_stream = Base64Stream(stream,leave_open=True)
    def write(self,data):
        self.base64_stream.write(data)
    def writelines(self,list):
        self.base64_stream.writelines(list)
    def reset(self):
        self.base64_stream.finalize()
    def close(self):
        self.base64_stream.close()
        self.stream.close()
    def __exit__(self,exc_type,exc_value,exc_traceback):
        self.close()

class StreamReader(codecs.StreamReader):
    def __init__(self,stream,errors='strict'):
        super(StreamReader,self).__init__(stream,errors)
        self.base64_stream = Base64Stream(stream,leave_open=True)
    def read(self,size=-1,chars=-1,firstline=False):
        return self.base64_stream.read(size)
    def close(self):
        self.base64_stream.close()
        self.stream.close()
    def __exit__(self,exc_type,exc_value,exc_traceback):
        self.close()

def codec_search_function(codec_name):
    """
    >>> codecs.lookup('sextet').name
    'sextet'
    """
    if codec_name == 'sextet' or codec_name == 'sextet_codec':
        return codecs.CodecInfo(name='sextet',encode=codec_encode,decode=codec_decode,streamwriter=StreamWriter,streamreader=StreamReader)
codecs.register(codec_search_function)
