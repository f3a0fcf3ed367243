#############################################################################
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
#############################################################################
#
#  Project Name        :    Pool diagnostic output
#
#############################################################################
import struct

CHECKSUM_SIZE = 8

class Fletcher64:
    """
    Fletcher64 checksum over little-endian 32-bit words, as stored in
    pool headers. The 8 byte checksum field itself is summed as zero.
    """

    def __init__(self, csum_offset: int) -> None:
        assert csum_offset % 4 == 0, 'checksum field must be 32-bit aligned'
        self.skip = {csum_offset // 4, csum_offset // 4 + 1}
        self.position = 0
        self.lo32 = 0
        self.hi32 = 0

    def process(self, data: bytes | bytearray | memoryview) -> None:
        """
        Adds data to the checksum. The length of data must be a
        multiple of 4 bytes.
        """
        for idx, (word,) in enumerate(struct.iter_unpack('<I', data), start=self.position):
            if idx not in self.skip:
                self.lo32 = (self.lo32 + word) & 0xFFFFFFFF
            self.hi32 = (self.hi32 + self.lo32) & 0xFFFFFFFF
        self.position += len(data) // 4

    def final(self) -> int:
        return (self.hi32 << 32) | self.lo32


def checksum(data: bytes | bytearray, length: int, csum_offset: int) -> int:
    assert length % 4 == 0, 'length must be a multiple of 4'
    assert 0 <= csum_offset and csum_offset + CHECKSUM_SIZE <= length
    f64 = Fletcher64(csum_offset)
    f64.process(memoryview(data)[:length])
    return f64.final()

def read_checksum(data: bytes | bytearray, csum_offset: int) -> int:
    return struct.unpack_from('<Q', data, csum_offset)[0]

def insert_checksum(data: bytearray, length: int, csum_offset: int) -> int:
    csum = checksum(data, length, csum_offset)
    struct.pack_into('<Q', data, csum_offset, csum)
    return csum

def validate_checksum(data: bytearray, length: int, csum_offset: int) -> bool:
    """
    Checks the stored checksum. If it is wrong, the correct value is
    written into the checksum field.
    """
    if read_checksum(data, csum_offset) == checksum(data, length, csum_offset):
        return True
    insert_checksum(data, length, csum_offset)
    return False
