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
Canonical hex+ASCII dump of a buffer.

Each line shows the offset in hexadecimal, sixteen space-separated two
column hexadecimal bytes, followed by the same sixteen bytes as printable
ASCII characters enclosed in '|' characters. A row that is identical to
the previously printed row is replaced by a single '*' line.
"""
from collections.abc import Iterator

ROW_WIDTH = 16
# 2 chars + space per byte, an extra space after 8 bytes and a terminator
ROW_HEX_LEN = ROW_WIDTH * 3 + 1 + 1
# 1 printable char per byte + terminator
ROW_ASCII_LEN = ROW_WIDTH + 1
REPEATED_ROW_MARKER = '*\n'
SEPARATOR_CHAR = '-'

def printable_ascii(value: int) -> str:
    if 0x20 <= value < 0x7F:
        return chr(value)
    return '.'

def ascii_str(row: bytes | memoryview) -> str:
    assert len(row) < ROW_ASCII_LEN
    return ''.join(printable_ascii(b) for b in row)

def hex_str(row: bytes | memoryview) -> str:
    assert 3 * len(row) + 1 < ROW_HEX_LEN
    parts: list[str] = []
    for idx, b in enumerate(row):
        if idx and (idx % 8) == 0:
            parts.append(' ')
        parts.append(f'{b:02x} ')
    return ''.join(parts)

def format_row(position: int, row: bytes | memoryview) -> str:
    return '{0:08x}  {1:<{2}}|{3:<{4}}|\n'.format(
        position, hex_str(row), ROW_HEX_LEN, ascii_str(row), ROW_WIDTH)

def format_hexdump(data: bytes | bytearray | memoryview, offset: int = 0,
                   separator: bool = False) -> Iterator[str]:
    """
    Generates the lines of a hex dump of data, each one including its
    newline. offset is added to the position shown for every row.
    If separator is True and at least one row was printed, a line of
    '-' characters one shorter than the last printed row follows the dump.
    """
    view = memoryview(data).cast('B')
    length = len(view)
    curr = 0
    prev: memoryview | None = None
    repeated = False
    last_line: str | None = None
    while curr < length:
        row = view[curr:curr + ROW_WIDTH]
        # the first row and a short final row are never suppressed
        if prev is not None and len(row) == ROW_WIDTH and row == prev:
            if not repeated:
                yield REPEATED_ROW_MARKER
                repeated = True
        else:
            repeated = False
            last_line = format_row(curr + offset, row)
            yield last_line
            prev = row
        curr += len(row)
    if separator and last_line is not None:
        yield SEPARATOR_CHAR * (len(last_line) - 1) + '\n'
