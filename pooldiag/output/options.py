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
from collections.abc import Mapping
from dataclasses import dataclass
import os
from typing import TextIO

DEFAULT_COLUMN_WIDTH = 20

@dataclass(kw_only=True)
class OutputOptions:
    verbosity: int = 0
    column_width: int = DEFAULT_COLUMN_WIDTH
    prefix: str | None = None
    stream: TextIO | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "OutputOptions":
        """
        Creates options from POOLDIAG_VERBOSITY, POOLDIAG_COLUMN_WIDTH and
        POOLDIAG_PREFIX. Variables that are not set keep their default value.
        """
        if environ is None:
            environ = os.environ
        opts = cls()
        verbosity = environ.get('POOLDIAG_VERBOSITY')
        if verbosity:
            opts.verbosity = int(verbosity, 10)
        column_width = environ.get('POOLDIAG_COLUMN_WIDTH')
        if column_width:
            opts.column_width = int(column_width, 10)
            if opts.column_width < 0:
                raise ValueError(
                    f'Invalid column width: {column_width}')
        prefix = environ.get('POOLDIAG_PREFIX')
        if prefix:
            opts.prefix = prefix
        return opts
