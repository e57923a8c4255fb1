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

from .exceptions import UpdateFailedError

class AggregateResult(object):
    """The combined outcome of one invocation

    Attributes:
        outcomes (tuple[UpdateOutcome]): In the order they completed
        rejected (tuple[tuple[Record, Exception]]): Records that could not be
                                                    resolved into targets
    """
    def __init__(self, outcomes, rejected=()):
        self.outcomes = tuple(outcomes)
        self.rejected = tuple(rejected)

    @property
    def succeeded(self):
        return len(self.rejected) == 0 and all(o.succeeded for o in self.outcomes)

    @property
    def failures(self):
        return [(o.function_name, o.error) for o in self.outcomes if not o.succeeded]

    @property
    def updated(self):
        return [o.function_name for o in self.outcomes if o.succeeded]

    def __repr__(self):
        return "AggregateResult(updated={}, failed={}, rejected={})".format(
            self.updated, [name for name, _ in self.failures], len(self.rejected))

def aggregate(outcomes, rejected=()):
    """Merge the per function outcomes into the invocation's result

    Args:
        outcomes (list[UpdateOutcome]): Every outcome from dispatch()
        rejected (list[tuple[Record, Exception]]): Records that were not dispatched

    Returns:
        AggregateResult: If every update succeeded and no record was rejected

    Raises:
        UpdateFailedError: Listing every failed function and rejected record
    """
    result = AggregateResult(outcomes, rejected)
    if not result.succeeded:
        raise UpdateFailedError(result.failures, result.rejected, result)
    return result
