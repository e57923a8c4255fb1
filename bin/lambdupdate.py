#!/usr/bin/env python3

# Copyright 2019 The Johns Hopkins University Applied Physics Laboratory
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Point existing lambda functions at a code zip that is already in S3.

Runs the same pipeline as the lambdupdate Lambda handler, using an event built
from the command line arguments. See `lambdupdate.py --help`.
"""

import alter_path
from lambdupdate.cli import main

if __name__ == '__main__':
    main()
