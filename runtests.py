#!/usr/bin/env python

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
import os
import sys
import unittest

def fixup_test_filename(name: str) -> str:
    _, tail = os.path.split(name)
    root, _ = os.path.splitext(tail)
    return root

FORMAT = r"%(asctime)-15s:%(levelname)s:%(filename)s@%(lineno)d: %(message)s"
logging.basicConfig(format=FORMAT)
logging.getLogger().setLevel(logging.ERROR)

if __name__ == "__main__":
    patterns = [f"{fixup_test_filename(arg)}.py" for arg in sys.argv[1:]]
    if not patterns:
        patterns = ["test_*.py"]
    suite = unittest.TestSuite(
        unittest.defaultTestLoader.discover("tests", pattern=pattern)
        for pattern in patterns)
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    sys.exit(0 if result.wasSuccessful() else 1)
