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
import argparse
import logging
from pathlib import Path
import sys

from pooldiag.checksum.fletcher64 import CHECKSUM_SIZE
from pooldiag.output.options import DEFAULT_COLUMN_WIDTH, OutputOptions
from pooldiag.output.renderers import checksum_str, size_str, time_str
from pooldiag.output.size_format import SizeFormat
from pooldiag.output.writer import OutputWriter

class PoolFileDump:
    """
    Prints information about a pool file and a hex dump of its contents
    """

    FIELDS_LEVEL = 1
    HEXDUMP_LEVEL = 2

    def __init__(self, out: OutputWriter, size_format: SizeFormat = SizeFormat.BOTH) -> None:
        self.out = out
        self.size_format = size_format
        self.log = logging.getLogger('pooldiag-dump')

    def dump(self, filename: Path, offset: int = 0, length: int | None = None,
             csum_offset: int | None = None, csum_length: int | None = None) -> bool:
        if offset < 0:
            self.out.error('invalid offset %d\n', offset)
            return False
        if length is not None and length < 0:
            self.out.error('invalid length %d\n', length)
            return False
        try:
            info = filename.stat()
            with filename.open('rb') as src:
                src.seek(offset)
                if length is None:
                    data = src.read()
                else:
                    data = src.read(length)
        except OSError as err:
            self.out.error('%s: %s\n', filename, err.strerror)
            return False
        self.log.debug('Read %d bytes from %s at offset %d', len(data), filename, offset)
        self.out.field(self.FIELDS_LEVEL, 'path', '%s', filename)
        if self.out.verbosity_allows(self.FIELDS_LEVEL):
            self.out.field(self.FIELDS_LEVEL, 'size', size_str(info.st_size, self.size_format))
            self.out.field(self.FIELDS_LEVEL, 'modified', time_str(info.st_mtime))
        if csum_offset is not None and self.out.verbosity_allows(self.FIELDS_LEVEL):
            buf = bytearray(data)
            if csum_length is None:
                csum_length = len(buf) - (len(buf) % 4)
            if (csum_offset < 0 or csum_offset % 4 or csum_length % 4 or
                    csum_length > len(buf) or csum_offset + CHECKSUM_SIZE > csum_length):
                self.out.error('invalid checksum field %d in %d bytes\n', csum_offset, csum_length)
                return False
            self.out.field(self.FIELDS_LEVEL, 'checksum',
                           checksum_str(buf, csum_offset, length=csum_length))
        self.out.hexdump(self.HEXDUMP_LEVEL, data, offset=offset, separator=True)
        return True

    @staticmethod
    def parse_args(argv: list[str] | None) -> argparse.Namespace:
        ap = argparse.ArgumentParser(description='Pool file diagnostic dump')
        ap.add_argument('-v', '--verbose', action='count', default=1,
                        help='Increase verbosity (repeat for a hex dump)')
        ap.add_argument('--debug', action="store_true")
        ap.add_argument('--column-width', type=int, default=None,
                        help=f'Width of field labels (default {DEFAULT_COLUMN_WIDTH})')
        ap.add_argument('--prefix', '-p', help='Prefix for every output line')
        ap.add_argument('--offset', '-o', type=int, default=0,
                        help='Start offset of the dump')
        ap.add_argument('--length', '-l', type=int, default=None,
                        help='Number of bytes to dump (default: to end of file)')
        units = ap.add_mutually_exclusive_group()
        units.add_argument('--human', '-H', dest='size_format', action='store_const',
                           const=SizeFormat.HUMAN, help='Show sizes in human readable form')
        units.add_argument('--bytes', '-b', dest='size_format', action='store_const',
                           const=SizeFormat.RAW, help='Show sizes in bytes')
        units.add_argument('--size-format', dest='size_format', type=SizeFormat.from_string,
                           help='Size format: raw, human or both (default both)')
        ap.add_argument('--csum-offset', type=int, default=None,
                        help='Offset of a Fletcher64 checksum field to validate')
        ap.add_argument('--csum-length', type=int, default=None,
                        help='Number of bytes covered by the checksum')
        ap.add_argument('filename', type=Path, help='Pool file')
        return ap.parse_args(argv)

    @classmethod
    def main(cls, argv: list[str] | None = None) -> int:
        args = cls.parse_args(argv)
        dd_log = logging.getLogger('pooldiag-dump')
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s: %(message)s'))
        dd_log.addHandler(ch)
        if args.debug:
            logging.getLogger().setLevel(logging.DEBUG)
            dd_log.setLevel(logging.DEBUG)
        else:
            dd_log.setLevel(logging.INFO)
        try:
            options = OutputOptions.from_environ()
        except ValueError as err:
            OutputWriter.error('%s\n', err)
            return 1
        if args.column_width is not None:
            options.column_width = args.column_width
        if args.prefix is not None:
            options.prefix = args.prefix
        out = OutputWriter(options)
        out.set_verbosity(max(options.verbosity, args.verbose))
        size_format = args.size_format
        if size_format is None:
            size_format = SizeFormat.BOTH
        dump = cls(out, size_format)
        if not dump.dump(args.filename, offset=args.offset, length=args.length,
                         csum_offset=args.csum_offset, csum_length=args.csum_length):
            return 1
        return 0


def main() -> None:
    sys.exit(PoolFileDump.main())


if __name__ == "__main__":
    main()
