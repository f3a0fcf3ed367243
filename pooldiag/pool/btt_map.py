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
from dataclasses import dataclass
from enum import Enum

import bitstring

LBA_MASK = 0x3fffffff
FLAGS_MASK = ~LBA_MASK & 0xffffffff

# flag bit patterns of a map entry
ENTRY_ZERO = 0x80000000
ENTRY_ERROR = 0x40000000
ENTRY_NORMAL = 0xc0000000

class MapEntryState(Enum):
    INIT = 'init'
    ZERO = 'zero'
    ERROR = 'error'
    NORMAL = 'normal'
    UNKNOWN = 'unknown'

    @classmethod
    def from_flags(cls, flags: int) -> "MapEntryState":
        """
        Classifies the (unshifted) flag bits of a map entry
        """
        if flags & ~FLAGS_MASK:
            return cls.UNKNOWN
        if flags == 0:
            return cls.INIT
        if flags == ENTRY_ZERO:
            return cls.ZERO
        if flags == ENTRY_ERROR:
            return cls.ERROR
        if flags == ENTRY_NORMAL:
            return cls.NORMAL
        return cls.UNKNOWN


@dataclass(slots=True, frozen=True)
class MapEntry:
    lba: int
    flags: int
    state: MapEntryState

    @classmethod
    def from_int(cls, value: int) -> "MapEntry":
        bits = bitstring.Bits(uint=value & 0xffffffff, length=32)
        flag_bits, lba = bits.unpack('uint:2, uint:30')
        flags = flag_bits << 30
        return cls(lba=lba, flags=flags, state=MapEntryState.from_flags(flags))
