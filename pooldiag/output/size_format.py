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
from enum import IntEnum

class SizeFormat(IntEnum):
    """
    Selects how a byte count is rendered by size_str()
    """

    RAW = 0
    HUMAN = 1
    BOTH = 2

    @classmethod
    def from_string(cls, name: str) -> "SizeFormat":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f'Unknown size format: "{name}"') from None
