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

import os, sys

cur_dir = os.path.dirname(os.path.realpath(__file__))

# Allow bin/ scripts to import the lambdupdate package without installing it
parent_dir = os.path.normpath(os.path.join(cur_dir, '..'))
if parent_dir not in sys.path:
    sys.path.append(parent_dir)
