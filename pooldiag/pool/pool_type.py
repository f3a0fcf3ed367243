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
from typing import ClassVar

class PoolType(IntEnum):
    """
    Enumerates the kinds of pool that can be inspected
    """

    NONE = 0x00
    LOG = 0x01
    BLK = 0x02
    OBJ = 0x04
    UNKNOWN = 0x80

    __labels: ClassVar[dict[int, str]] = {
        0x01: 'log',
        0x02: 'blk',
        0x04: 'obj',
    }

    @property
    def label(self) -> str:
        return PoolType.__labels.get(self.value, 'unknown')

    @classmethod
    def label_for(cls, value: int) -> str:
        """
        Returns the short label of a pool type. Values that are not
        a known pool kind are reported as "unknown".
        """
        try:
            return cls(value).label
        except ValueError:
            return 'unknown'
