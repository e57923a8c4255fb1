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
Fan out of the update function code requests.

Every target gets its own worker thread and exactly one request. A failed
request is recorded as a failed UpdateOutcome; the remaining requests are
still made and all of them are waited on before returning.
"""

import logging
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor, as_completed

LOGGER = logging.getLogger(__name__)

"""
Fields:
    function_name (str): Name of the Lambda function
    succeeded (bool): If the update request succeeded
    error (optional[Exception]): The reason the request failed
"""
UpdateOutcome = namedtuple('UpdateOutcome', ['function_name', 'succeeded', 'error'])

class FunctionUpdater(object):
    """Interface for pointing a function's code at a zip in S3

    Implementations are scoped to one region and must be safe to call from
    multiple threads at once.
    """
    def update_code(self, function_name, source_bucket, source_key):
        """Point the function's code at the given object

        Args:
            function_name (str): Name of the Lambda function
            source_bucket (str): Bucket holding the code zip
            source_key (str): Key of the code zip

        Raises:
            Exception: If the update failed
        """
        raise NotImplementedError()

def update_target(updater, target):
    """Make the update request for a single target

    Args:
        updater (FunctionUpdater): Region scoped update capability
        target (ResolvedTarget): Target to update

    Returns:
        UpdateOutcome
    """
    LOGGER.debug("Update Function Code: {} <-- {}:{}".format(
        target.function_name, target.source_bucket, target.source_key))
    try:
        updater.update_code(target.function_name, target.source_bucket, target.source_key)
    except Exception as ex:
        LOGGER.error("Update Function Code Failed: {} <-- {}:{}: {}".format(
            target.function_name, target.source_bucket, target.source_key, ex))
        return UpdateOutcome(target.function_name, False, ex)

    LOGGER.info("Update Function Code Succeeded: {} <-- {}:{}".format(
        target.function_name, target.source_bucket, target.source_key))
    return UpdateOutcome(target.function_name, True, None)

def dispatch(targets, updater):
    """Update all of the targets concurrently

    Args:
        targets (list[ResolvedTarget]): Targets across all records
        updater (FunctionUpdater): Region scoped update capability

    Returns:
        list[UpdateOutcome]: One outcome per target, in completion order
    """
    targets = list(targets)
    LOGGER.debug("{} function(s) to update".format(len(targets)))
    if len(targets) == 0:
        return []

    with ThreadPoolExecutor(max_workers=len(targets)) as executor:
        futures = [executor.submit(update_target, updater, target)
                   for target in targets]
        return [future.result() for future in as_completed(futures)]
