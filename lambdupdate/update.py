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

import logging

from .event import parse_event, get_region
from .resolver import resolve_targets
from .dispatcher import dispatch
from .results import aggregate
from .exceptions import EmptyFunctionNameError

LOGGER = logging.getLogger(__name__)

def fill_metadata(record, lookup):
    """Fetch the object metadata if the notification didn't include it

    Args:
        record (Record): The uploaded object
        lookup (optional[MetadataLookup]): Region scoped metadata capability

    Returns:
        Record: With metadata populated, if it could be found
    """
    if record.metadata is not None or lookup is None:
        return record

    metadata = lookup.lookup(record.bucket_name, record.object_key)
    if metadata is None:
        return record
    return record._replace(metadata={k.lower(): v for k, v in metadata.items()})

def update(payload, updater_factory, lookup_factory=None):
    """Update every function named by an S3 code upload notification

    Args:
        payload (dict|str|bytes): The notification
        updater_factory (callable): Called with the region, returns the
                                    FunctionUpdater to use
        lookup_factory (optional[callable]): Called with the region, returns
                                             the MetadataLookup to use for
                                             records without metadata

    Returns:
        AggregateResult: If every function was updated

    Raises:
        ParseError: If the notification is malformed, before any update
        MissingRegionError: If there is no region, before any update
        UpdateFailedError: After all updates finished, if any failed or any
                           record could not be resolved
    """
    event = parse_event(payload)
    region = get_region(event)

    updater = updater_factory(region)
    lookup = lookup_factory(region) if lookup_factory is not None else None

    targets = []
    rejected = []
    for record in event.records:
        LOGGER.debug("Record: {}".format(record))
        record = fill_metadata(record, lookup)

        try:
            targets.extend(resolve_targets(record))
        except EmptyFunctionNameError as ex:
            LOGGER.error("Skipping {}:{}: {}".format(record.bucket_name, record.object_key, ex))
            rejected.append((record, ex))

    outcomes = dispatch(targets, updater)
    return aggregate(outcomes, rejected)
