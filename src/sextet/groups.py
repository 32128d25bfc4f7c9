"""
Bit group state for the two directions of a base64 stream.

A group is 24 bits: three 8-bit bytes on the binary side, four 6-bit symbols on the base64 side.
The encoder and decoder each own one group and never share it.

>>> out = OutputBitGroup()
>>> [out.push(b) for b in b'Man']
[False, False, True]
>>> hex(out.take()), out.step
('0x4d616e', 0)

>>> inp = InputBitGroup()
>>> inp.load(0x4d616e,3)
>>> inp.pop(), inp.pending(), inp.pop(), inp.pop(), inp.pending()
(77, True, 97, 110, False)
"""

class OutputBitGroup(object):
    """
    Bytes waiting to become four symbols.

    step is the number of bytes placed so far (0, 1 or 2). The first byte occupies bits 16-23, the second bits 8-15 and the third bits 0-7.
    bits is only meaningful while step is 1 or 2; once the third byte arrives the group is taken and cleared.
    """
    def __init__(self):
        self.bits = 0
        self.step = 0

    def push(self,b):
        """
        Places a byte at the current step. Returns True when the group is full and must be taken.
        """
        self.bits |= (b & 0xff) << (16 - 8*self.step)
        self.step += 1
        return self.step == 3

    def take(self):
        bits = self.bits
        self.clear()
        return bits

    def clear(self):
        self.bits = 0
        self.step = 0

class InputBitGroup(object):
    """
    Decoded bytes waiting to be handed to the caller.

    size is how many bytes the last decoded group produced (0 to 3).
    step is how many of those have been handed out. A new group is decoded only once step reaches size.
    """
    def __init__(self):
        self.bits = 0
        self.size = 0
        self.step = 0

    def load(self,bits,size):
        self.bits = bits
        self.size = size
        self.step = 0

    def pending(self):
        return self.step < self.size

    def pop(self):
        """
        Returns the next byte of the group: bits 16-23, then 8-15, then 0-7.
        """
        value = (self.bits >> (16 - 8*self.step)) & 0xff
        self.step += 1
        return value

    def clear(self):
        self.bits = 0
        self.size = 0
        self.step = 0
