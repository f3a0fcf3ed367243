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
"""
Functions that turn a single raw value from a pool into the text used
in diagnostic output. Every function returns a new string, so results
from earlier calls stay valid.
"""
import time
from typing import Callable
import uuid

from pooldiag.checksum.fletcher64 import CHECKSUM_SIZE, validate_checksum
from pooldiag.pool.btt_map import MapEntry
from pooldiag.pool.pool_type import PoolType

from .size_format import SizeFormat

TIME_STR_FORMAT = r'%a %b %d %Y %H:%M:%S'
SIZE_UNITS = 'KMGT'

ChecksumValidator = Callable[[bytearray, int, int], bool]

def percentage_str(perc: float) -> str:
    if 0.0 < perc < 0.0001:
        return f'{perc:e} %'
    if perc >= 100.0 or perc == 0.0:
        decimal = 0
    else:
        decimal = 6
    return f'{perc:.{decimal}f} %'

def size_str(size: int, human: SizeFormat | int = SizeFormat.RAW) -> str:
    """
    Returns a byte count as text.
    RAW gives the number of bytes, HUMAN gives the value scaled to
    the largest unit (K, M, G or T) and BOTH gives the scaled value
    followed by the number of bytes in brackets. Sizes below 1K are
    always shown as a number of bytes.
    """
    assert size >= 0
    human = SizeFormat(human)
    if human == SizeFormat.RAW:
        return f'{size:d}'
    unit = -1
    scaled = float(size)
    while scaled >= 1024 and unit < len(SIZE_UNITS) - 1:
        scaled /= 1024.0
        unit += 1
    if unit < 0:
        return f'{size:d}'
    if human == SizeFormat.HUMAN:
        return f'{scaled:.1f}{SIZE_UNITS[unit]}'
    return f'{scaled:.1f}{SIZE_UNITS[unit]} [{size:d}]'

def uuid_str(value: uuid.UUID | bytes) -> str:
    if not isinstance(value, uuid.UUID):
        value = uuid.UUID(bytes=bytes(value))
    return str(value)

def time_str(timestamp: float) -> str:
    try:
        tm = time.localtime(timestamp)
    except (OverflowError, OSError, ValueError):
        return 'unknown'
    return time.strftime(TIME_STR_FORMAT, tm)

def checksum_str(data: bytearray, csum_offset: int, length: int | None = None,
                 validator: ChecksumValidator = validate_checksum) -> str:
    """
    Validates the checksum stored at csum_offset in data and describes
    the result. The validator may overwrite the checksum field with the
    correct value; the original bytes are always put back before
    returning.
    """
    if length is None:
        length = len(data)
    end = csum_offset + CHECKSUM_SIZE
    assert 0 <= csum_offset and end <= len(data)
    original = bytes(data[csum_offset:end])
    csum = int.from_bytes(original, 'little')
    try:
        valid = validator(data, length, csum_offset)
        correct = int.from_bytes(data[csum_offset:end], 'little')
    finally:
        data[csum_offset:end] = original
    if valid:
        return f'0x{csum & 0xFFFFFFFF:08x} [OK]'
    return (f'0x{csum & 0xFFFFFFFF:08x} [wrong! should be: '
            f'0x{correct & 0xFFFFFFFF:08x}]')

def map_entry_str(value: int) -> str:
    entry = MapEntry.from_int(value)
    return f'0x{entry.lba:08x} state: {entry.state.value}'

def pool_type_str(pool_type: PoolType | int) -> str:
    return PoolType.label_for(pool_type)
