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

"""Helpers shared by the lambdupdate unit tests"""

import threading

import botocore.exceptions

from lambdupdate.dispatcher import FunctionUpdater
from lambdupdate.aws import MetadataLookup

def client_error(code='ResourceNotFoundException', message='Function not found',
                 operation='UpdateFunctionCode'):
    return botocore.exceptions.ClientError({'Error': {'Code': code, 'Message': message}},
                                           operation)

class FakeUpdater(FunctionUpdater):
    """Records every update_code() call

    Args:
        failures (dict): Mapping of function name to the exception to raise
        barrier (optional[threading.Barrier]): Waited on by every call, used
                                               to prove the calls overlap
    """
    def __init__(self, failures=None, barrier=None):
        self.failures = failures or {}
        self.barrier = barrier
        self.calls = []
        self.lock = threading.Lock()

    def update_code(self, function_name, source_bucket, source_key):
        with self.lock:
            self.calls.append((function_name, source_bucket, source_key))

        if self.barrier is not None:
            self.barrier.wait()

        if function_name in self.failures:
            raise self.failures[function_name]

class FakeLookup(MetadataLookup):
    def __init__(self, metadata=None):
        self.metadata = metadata or {}
        self.calls = []

    def lookup(self, bucket, key):
        self.calls.append((bucket, key))
        return self.metadata.get((bucket, key))

def record(region='us-east-1', bucket='code', key='svc.zip', metadata=None):
    obj = {'key': key}
    if metadata is not None:
        obj['metadata'] = metadata
    return {'region': region, 'bucket': {'name': bucket}, 'object': obj}

def event(*records):
    return {'records': list(records)}
