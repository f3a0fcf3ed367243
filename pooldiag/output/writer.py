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
import logging
import sys
from typing import Any, TextIO

from .hexdump import format_hexdump
from .options import OutputOptions

class OutputWriter:
    """
    Writes diagnostic output to a stream, filtered by verbosity level.

    An item of output with a level less than or equal to the configured
    verbosity is written, everything else is discarded. Field labels are
    padded to the configured column width so that values line up.
    """

    options: OutputOptions
    log: logging.Logger

    def __init__(self, options: OutputOptions | None = None) -> None:
        if options is None:
            options = OutputOptions()
        self.options = options
        self.log = logging.getLogger('output')

    def init_stream(self) -> TextIO:
        """
        Selects standard output if no stream has been configured
        """
        if self.options.stream is None:
            self.log.debug('Using stdout for output')
            self.options.stream = sys.stdout
        return self.options.stream

    def set_verbosity(self, level: int) -> None:
        self.log.debug('Verbosity level %d', level)
        self.options.verbosity = level
        self.init_stream()

    def set_stream(self, stream: TextIO) -> None:
        self.options.stream = stream

    def set_prefix(self, prefix: str | None) -> None:
        self.options.prefix = prefix

    def set_column_width(self, width: int) -> None:
        self.options.column_width = width

    def verbosity_allows(self, level: int) -> bool:
        return level <= self.options.verbosity

    @property
    def stream(self) -> TextIO:
        if self.options.stream is None:
            raise RuntimeError('Output stream has not been initialised')
        return self.options.stream

    def _write_prefix(self) -> None:
        if self.options.prefix is not None:
            self.stream.write(f'{self.options.prefix}: ')

    def message(self, level: int, fmt: str, *args: Any) -> None:
        if not self.verbosity_allows(level):
            return
        self._write_prefix()
        self.stream.write(fmt % args if args else fmt)

    def field(self, level: int, label: str, fmt: str, *args: Any) -> None:
        """
        Writes one "label : value" line. The value is only formatted
        if the verbosity level allows the line to be written.
        """
        if not self.verbosity_allows(level):
            return
        self._write_prefix()
        value = fmt % args if args else fmt
        self.stream.write(
            f'{label.ljust(self.options.column_width)} : {value}\n')

    def hexdump(self, level: int, data: bytes | bytearray | memoryview,
                offset: int = 0, separator: bool = False) -> None:
        if not self.verbosity_allows(level) or len(data) == 0:
            return
        stream = self.stream
        for line in format_hexdump(data, offset=offset, separator=separator):
            stream.write(line)

    @staticmethod
    def error(fmt: str, *args: Any) -> None:
        sys.stderr.write('error: ')
        sys.stderr.write(fmt % args if args else fmt)
