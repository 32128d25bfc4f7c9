import base64
import io
import unittest
from sextet import Base64Encoder, Transport, Alphabet, UseAfterClose
from helpers import PartialWriter, FailingSink

DATA = bytes(range(256))*4

def encoder(sink,**kwargs):
    return Base64Encoder(Transport(sink),**kwargs)

class TestEncoder(unittest.TestCase):
    def test_vectors(self):
        for data,expected in ((b'Man',b'TWFu'),(b'Ma',b'TWE='),(b'M',b'TQ=='),(b'',b'')):
            sink = io.BytesIO()
            e = encoder(sink)
            e.write(data)
            e.finalize()
            self.assertEqual(sink.getvalue(),expected)

    def test_matches_standard_library(self):
        for n in range(0,50):
            sink = io.BytesIO()
            e = encoder(sink)
            self.assertEqual(e.write(DATA[:n]),n)
            e.finalize()
            self.assertEqual(sink.getvalue(),base64.b64encode(DATA[:n]))

    def test_padding_count(self):
        for n in range(1,30):
            sink = io.BytesIO()
            e = encoder(sink)
            e.write(DATA[:n])
            e.finalize()
            expected_padding = {0:0,1:2,2:1}[n % 3]
            output = sink.getvalue()
            self.assertEqual(len(output) - len(output.rstrip(b'=')),expected_padding)
            self.assertEqual(len(output) % 4,0)

    def test_padding_disabled(self):
        for n in range(1,30):
            sink = io.BytesIO()
            e = encoder(sink,alphabet=Alphabet('+','/',None))
            e.write(DATA[:n])
            e.finalize()
            self.assertEqual(sink.getvalue(),base64.b64encode(DATA[:n]).rstrip(b'='))

    def test_custom_padding_symbol(self):
        sink = io.BytesIO()
        e = encoder(sink,alphabet=Alphabet('-','_','~'))
        e.write(b'\xfb\xff')
        e.finalize()
        self.assertEqual(sink.getvalue(),b'-_8~')

    def test_write_byte_matches_write(self):
        whole = io.BytesIO()
        e = encoder(whole)
        e.write(DATA)
        e.finalize()
        single = io.BytesIO()
        e = encoder(single)
        for b in DATA:
            e.write_byte(b)
        e.finalize()
        self.assertEqual(single.getvalue(),whole.getvalue())

    def test_mixed_write_sizes(self):
        for sizes in ((1,),(2,),(4,),(5,7,1),(3,3,2),(1000,)):
            sink = io.BytesIO()
            e = encoder(sink,buffer_size=6)
            pos = 0
            i = 0
            while pos < len(DATA):
                size = sizes[i % len(sizes)]
                e.write(DATA[pos:pos+size])
                pos += size
                i += 1
            e.finalize()
            self.assertEqual(sink.getvalue(),base64.b64encode(DATA))

    def test_write_byte_masks_to_eight_bits(self):
        sink = io.BytesIO()
        e = encoder(sink)
        for b in (0x14d,0x161,0x26e):
            e.write_byte(b)
        e.finalize()
        self.assertEqual(sink.getvalue(),b'TWFu')

    def test_write_accepts_buffers(self):
        for data in (bytearray(b'Man'),memoryview(b'xManx')[1:4]):
            sink = io.BytesIO()
            e = encoder(sink)
            e.write(data)
            e.finalize()
            self.assertEqual(sink.getvalue(),b'TWFu')

    def test_write_rejects_text(self):
        e = encoder(io.BytesIO())
        with self.assertRaises(TypeError):
            e.write('Man')

    def test_flush_keeps_partial_group(self):
        sink = io.BytesIO()
        e = encoder(sink)
        e.write(b'Mana')
        self.assertEqual(sink.getvalue(),b'')
        e.flush()
        self.assertEqual(sink.getvalue(),b'TWFu')
        self.assertEqual(e.group.step,1)
        e.write(b'ma')
        e.flush()
        self.assertEqual(sink.getvalue(),b'TWFuYW1h')
        e.finalize()
        self.assertEqual(sink.getvalue(),base64.b64encode(b'Manama'))

    def test_finalize_is_repeatable(self):
        sink = io.BytesIO()
        e = encoder(sink)
        e.write(b'Ma')
        e.finalize()
        e.finalize()
        self.assertEqual(sink.getvalue(),b'TWE=')

    def test_finalize_on_released_transport(self):
        t = Transport(io.BytesIO())
        e = Base64Encoder(t)
        e.write(b'M')
        t.release()
        e.finalize()

    def test_finalize_drains_full_buffer(self):
        for n in range(1,12):
            sink = io.BytesIO()
            e = encoder(sink,buffer_size=6)
            e.write(DATA[:n])
            e.finalize()
            self.assertEqual(sink.getvalue(),base64.b64encode(DATA[:n]))

    def test_line_wrapping(self):
        sink = io.BytesIO()
        e = encoder(sink,line_length=10)
        self.assertEqual(e.line_length,12)
        e.write(DATA[:30])
        e.finalize()
        lines = sink.getvalue().split(b'\r\n')
        self.assertEqual([len(line) for line in lines],[12,12,12,4])
        self.assertEqual(b''.join(lines),base64.b64encode(DATA[:30]))

    def test_line_wrapping_mime(self):
        sink = io.BytesIO()
        e = encoder(sink,line_length=76,buffer_size=64)
        for b in DATA:
            e.write_byte(b)
        e.finalize()
        expected = base64.encodebytes(DATA).replace(b'\n',b'\r\n')
        self.assertEqual(sink.getvalue(),expected.rstrip(b'\r\n'))

    def test_line_length_disabled(self):
        for line_length in (0,-4,None):
            e = encoder(io.BytesIO(),line_length=line_length)
            self.assertEqual(e.line_length,0)

    def test_partial_writes_reach_sink(self):
        sink = PartialWriter(chunk=3)
        e = encoder(sink,buffer_size=16)
        e.write(DATA[:100])
        e.finalize()
        self.assertEqual(bytes(sink.written),base64.b64encode(DATA[:100]))
        self.assertGreater(sink.write_calls,1)

    def test_transport_failure_propagates(self):
        e = encoder(FailingSink(),buffer_size=6)
        e.write(b'Man')
        with self.assertRaises(OSError):
            e.write(b'Man')

    def test_use_after_close(self):
        t = Transport(io.BytesIO())
        e = Base64Encoder(t)
        t.close()
        with self.assertRaises(UseAfterClose):
            e.write(b'Man')
        with self.assertRaises(UseAfterClose):
            e.write_byte(1)
        with self.assertRaises(UseAfterClose):
            e.flush()
