import io

from minibf.core.config import RuntimeConfig

SMALL = RuntimeConfig(tape_size=1000)

BRAINFUCK_PRINTER = (
    "++++[>++++++<-]>-[[<+++++>>+<-]>-]<<[<]>>>>--.<<<-.>>>-.<.<.>---.<<+++.>>>++.<<---.[>]<<."
)


class ChunkedStream(io.RawIOBase):
    """Binary stream that reports end-of-transmission between chunks,
    like a terminal after Ctrl+D."""

    def __init__(self, chunks):
        super().__init__()
        self.chunks = [bytes(c) for c in chunks]
        self.pos = 0

    def readable(self):
        return True

    def read(self, size=-1):
        while self.chunks:
            chunk = self.chunks[0]
            if self.pos < len(chunk):
                data = chunk[self.pos:self.pos + 1]
                self.pos += 1
                return data
            self.chunks.pop(0)
            self.pos = 0
            return b""
        return b""
