import io
import re
import unittest

from pooldiag.output.hexdump import (
    ROW_HEX_LEN, ascii_str, format_hexdump, format_row, hex_str
)
from pooldiag.output.options import OutputOptions
from pooldiag.output.writer import OutputWriter

ROW_PATTERN = re.compile(r'^(?P<offset>[0-9a-f]{8,})  (?P<hex>[0-9a-f ]{50})\|(?P<ascii>.{16})\|$')

def full_hex(row: bytes) -> str:
    return hex_str(row).ljust(ROW_HEX_LEN)

class HexdumpFormattingTests(unittest.TestCase):
    def test_hex_str_group_spacing(self) -> None:
        self.assertEqual(hex_str(bytes(range(9))),
                         '00 01 02 03 04 05 06 07  08 ')
        self.assertEqual(hex_str(b'\xab'), 'ab ')
        self.assertEqual(hex_str(b''), '')
        self.assertEqual(len(hex_str(bytes(16))), 49)

    def test_ascii_str(self) -> None:
        data = bytes([0x00, 0x1f, 0x20, 0x41, 0x7e, 0x7f, 0x80, 0xff])
        self.assertEqual(ascii_str(data), '.. A~...')

    def test_format_row(self) -> None:
        line = format_row(0x10, b'WXYZ')
        expected = '00000010  ' + '57 58 59 5a '.ljust(50) + '|WXYZ            |\n'
        self.assertEqual(line, expected)
        self.assertEqual(len(format_row(0, bytes(16))), 79)

    def test_offset_wider_than_eight_digits(self) -> None:
        line = format_row(0x123456789, b'a')
        self.assertTrue(line.startswith('123456789  61 '))


class HexdumpTests(unittest.TestCase):
    def dump(self, data: bytes, offset: int = 0, separator: bool = False) -> list[str]:
        return list(format_hexdump(data, offset=offset, separator=separator))

    def test_identical_rows_are_suppressed(self) -> None:
        lines = self.dump(b'A' * 32)
        self.assertEqual(lines, [
            '00000000  ' + full_hex(b'A' * 16) + '|AAAAAAAAAAAAAAAA|\n',
            '*\n',
        ])

    def test_star_printed_once_per_run(self) -> None:
        lines = self.dump(bytes(16 * 5))
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[1], '*\n')

    def test_short_final_row_is_never_suppressed(self) -> None:
        data = b'0123456789abcdefWXYZ'
        lines = self.dump(data)
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith('00000000  30 31 32'))
        self.assertEqual(
            lines[1],
            '00000010  ' + full_hex(b'WXYZ') + '|WXYZ            |\n')
        lines = self.dump(b'A' * 20)
        self.assertEqual(len(lines), 2)
        self.assertNotIn('*\n', lines)
        self.assertTrue(lines[1].startswith('00000010  41 41 41 41 '))

    def test_single_short_row(self) -> None:
        lines = self.dump(b'hello')
        self.assertEqual(lines, [
            '00000000  ' + full_hex(b'hello') + '|hello           |\n'])

    def test_run_is_broken_by_different_row(self) -> None:
        data = b'A' * 32 + b'B' * 32 + b'A' * 16
        lines = self.dump(data)
        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[1], '*\n')
        self.assertTrue(lines[2].startswith('00000020  42 '))
        self.assertEqual(lines[3], '*\n')
        self.assertTrue(lines[4].startswith('00000040  41 '))

    def test_base_offset(self) -> None:
        lines = self.dump(b'\x01\x02', offset=0x1000)
        self.assertTrue(lines[0].startswith('00001000  01 02 '))

    def test_separator_width(self) -> None:
        lines = self.dump(b'A' * 48, separator=True)
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[2], '-' * (len(lines[0]) - 1) + '\n')
        self.assertEqual(lines[2], '-' * 78 + '\n')
        lines = self.dump(b'abc', separator=True)
        self.assertEqual(lines[-1], '-' * 78 + '\n')

    def test_no_separator_for_empty_buffer(self) -> None:
        self.assertEqual(self.dump(b'', separator=True), [])

    def test_dump_reconstructs_buffer(self) -> None:
        data = (bytes(range(40)) + b'\xff' * 64 + bytes(range(16)) * 3 +
                b'tail' + b'\x00' * 7)
        lines = self.dump(data, offset=0x200)
        self.assertEqual(self.reconstruct(lines, len(data), 0x200), data)

    def reconstruct(self, lines: list[str], length: int, base: int) -> bytes:
        result = bytearray()
        last_row = b''
        for line in lines:
            if line == '*\n':
                continue
            match = ROW_PATTERN.match(line.rstrip('\n'))
            self.assertIsNotNone(match, line)
            position = int(match['offset'], 16) - base
            while len(result) < position:
                result += last_row
            last_row = bytes.fromhex(match['hex'])
            result += last_row
        while len(result) < length:
            result += last_row
        return bytes(result[:length])


class WriterHexdumpTests(unittest.TestCase):
    def test_verbosity_gate(self) -> None:
        stream = io.StringIO()
        writer = OutputWriter(OutputOptions(verbosity=1, stream=stream))
        writer.hexdump(2, b'abc')
        self.assertEqual(stream.getvalue(), '')
        writer.hexdump(1, b'abc', separator=True)
        lines = stream.getvalue().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[1], '-' * 78)

    def test_empty_buffer(self) -> None:
        stream = io.StringIO()
        writer = OutputWriter(OutputOptions(verbosity=5, stream=stream))
        writer.hexdump(0, b'', separator=True)
        self.assertEqual(stream.getvalue(), '')

    def test_hexdump_ignores_prefix(self) -> None:
        stream = io.StringIO()
        writer = OutputWriter(OutputOptions(verbosity=1, stream=stream, prefix='pool'))
        writer.hexdump(1, b'A' * 32)
        self.assertEqual(stream.getvalue().splitlines()[1], '*')
        self.assertTrue(stream.getvalue().startswith('00000000  41 '))


if __name__ == "__main__":
    unittest.main()
