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

"""Decoding of the S3 "object created" notification into Record objects.

Two payload shapes are understood:

    Normalized (used by the CLI and tests):
        {"records": [{"region": "", "bucket": {"name": ""},
                      "object": {"key": "", "metadata": {}}}]}

    Native S3 notification (what Lambda receives from the bucket):
        {"Records": [{"awsRegion": "", "s3": {"bucket": {"name": ""},
                                              "object": {"key": ""}}}]}
"""

import json
import logging
from collections import namedtuple
from urllib.parse import unquote_plus

from .constants import FUNCTION_NAMES_MD_KEY
from .exceptions import ParseError, MissingRegionError

LOGGER = logging.getLogger(__name__)

"""
A single uploaded object.

Fields:
    region (str): AWS region the notification came from
    bucket_name (str): Bucket holding the code zip
    object_key (str): Key of the code zip
    metadata (optional[dict]): Object metadata with lower case keys, None if
                               the notification didn't carry any
"""
Record = namedtuple('Record', ['region', 'bucket_name', 'object_key', 'metadata'])

"""
Fields:
    records (list[Record]): At least one record
"""
NotificationEvent = namedtuple('NotificationEvent', ['records'])

def _decode(payload):
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode('utf-8')
        except UnicodeDecodeError as ex:
            raise ParseError("Payload is not UTF-8: {}".format(ex))

    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except ValueError as ex:
            raise ParseError("Payload is not valid JSON: {}".format(ex))

    if not isinstance(payload, dict):
        raise ParseError("Payload must be a JSON object, not {}".format(type(payload).__name__))

    return payload

def _lookup(data, *path):
    """Walk nested dictionaries, returning None if any step is missing"""
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data

def _normalize_metadata(metadata, index):
    if metadata is None:
        return None
    if not isinstance(metadata, dict):
        raise ParseError("Metadata of record {} must be an object".format(index))
    return {str(k).lower(): str(v) for k, v in metadata.items()}

def parse_record(data, index=0):
    """Parse one entry of the notification's record list

    Args:
        data (dict): The raw record
        index (int): Position of the record, used in error messages

    Returns:
        Record

    Raises:
        MissingRegionError: If the record has no region field
        ParseError: If the bucket name or object key is missing
    """
    if not isinstance(data, dict):
        raise ParseError("Record {} must be an object".format(index))

    if 's3' in data:
        region = data.get('awsRegion')
        entity = data['s3']
        encoded = True
    else:
        region = data.get('region')
        entity = data
        encoded = False

    if region is None:
        raise MissingRegionError(index)
    if not isinstance(region, str):
        raise ParseError("Region of record {} must be a string".format(index))

    bucket = _lookup(entity, 'bucket', 'name')
    if not isinstance(bucket, str) or not bucket:
        raise ParseError("Bucket not found in record {}".format(index))

    key = _lookup(entity, 'object', 'key')
    if not isinstance(key, str):
        raise ParseError("Key not found in record {}".format(index))
    if encoded:
        # S3 notifications URL encode object keys
        key = unquote_plus(key)

    metadata = _normalize_metadata(_lookup(entity, 'object', 'metadata'), index)

    return Record(region, bucket, key, metadata)

def parse_event(payload):
    """Decode the notification payload into a NotificationEvent

    Args:
        payload (dict|str|bytes): The notification, either already decoded or
                                  as JSON text

    Returns:
        NotificationEvent

    Raises:
        ParseError: If the payload is malformed or has zero records
        MissingRegionError: If a record has no region field
    """
    payload = _decode(payload)
    LOGGER.debug("Event: {}".format(payload))

    records = payload.get('records', payload.get('Records'))
    if records is None:
        raise ParseError("Payload has no record list")
    if not isinstance(records, list):
        raise ParseError("Record list must be an array")
    if len(records) == 0:
        raise ParseError("Payload has zero records")

    return NotificationEvent([parse_record(record, i) for i, record in enumerate(records)])

def get_region(event):
    """Get the region used to configure the AWS clients

    The first record's region is used for the whole batch. Records from other
    regions are still processed, but a warning is logged for each of them.

    Args:
        event (NotificationEvent): Parsed notification

    Returns:
        str: AWS region

    Raises:
        MissingRegionError: If the first record's region is empty
    """
    region = event.records[0].region
    if not region:
        raise MissingRegionError(0)

    for i, record in enumerate(event.records[1:], start=1):
        if record.region != region:
            LOGGER.warning("Record {} is from region '{}', using '{}' for the batch".format(
                i, record.region, region))

    return region

def create_event_record(region, bucket, key, function_names=None):
    """Create a normalized record for invoking the pipeline without a notification

    Args:
        region (str): AWS region
        bucket (str): Bucket holding the code zip
        key (str): Key of the code zip
        function_names (optional[str]): Comma separated function names that
                                        override the name derived from the key

    Returns:
        dict: Record suitable for the 'records' list of parse_event()
    """
    obj = {'key': key}
    if function_names is not None:
        obj['metadata'] = {FUNCTION_NAMES_MD_KEY: function_names}

    return {
        'region': region,
        'bucket': {'name': bucket},
        'object': obj,
    }

def create_event(region, bucket, key, function_names=None):
    return {'records': [create_event_record(region, bucket, key, function_names)]}
