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

class LambdUpdateError(Exception):
    pass

class ConfigurationError(LambdUpdateError):
    pass

class ParseError(LambdUpdateError):
    pass

class MissingRegionError(ParseError):
    def __init__(self, index=0):
        self.index = index

        msg = "Region not found in record {}".format(index)
        super(MissingRegionError, self).__init__(msg)

class EmptyFunctionNameError(LambdUpdateError):
    def __init__(self, bucket, key, source):
        self.bucket = bucket
        self.key = key
        self.source = source

        msg = "Empty function name derived from {} of {}:{}".format(source, bucket, key)
        super(EmptyFunctionNameError, self).__init__(msg)

class UpdateFailedError(LambdUpdateError):
    """Raised once every dispatched update has finished and at least one
    function could not be updated or one record could not be resolved

    Attributes:
        failures (list[tuple[str, Exception]]): (function name, cause) for each
                                                failed update
        rejected (list[tuple[Record, Exception]]): Records that were never
                                                   dispatched and why
        result (AggregateResult): Every outcome, including the successes
    """
    def __init__(self, failures, rejected=None, result=None):
        self.failures = list(failures)
        self.rejected = list(rejected or [])
        self.result = result

        lines = ["{} function(s) failed to update, {} record(s) rejected".format(
                    len(self.failures), len(self.rejected))]
        for function_name, error in self.failures:
            lines.append("  {}: {}".format(function_name, error))
        for record, error in self.rejected:
            lines.append("  {}:{}: {}".format(record.bucket_name, record.object_key, error))

        super(UpdateFailedError, self).__init__("\n".join(lines))

    @property
    def function_names(self):
        return [function_name for function_name, _ in self.failures]
