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
from collections import namedtuple

from . import constants as const
from .exceptions import EmptyFunctionNameError

LOGGER = logging.getLogger(__name__)

"""
A function that should be pointed at a new code zip.

Fields:
    function_name (str): Name of the Lambda function
    source_bucket (str): Bucket holding the code zip
    source_key (str): Key of the code zip
"""
ResolvedTarget = namedtuple('ResolvedTarget', ['function_name', 'source_bucket', 'source_key'])

def get_function_names_from_md(metadata):
    """Get the raw function names value from object metadata

    Args:
        metadata (optional[dict]): Object metadata, lower case keys

    Returns:
        optional[str]: Comma separated function names, None if not present
    """
    if not metadata:
        return None
    return metadata.get(const.FUNCTION_NAMES_MD_KEY)

def function_name_from_key(key):
    """Strip a trailing '.zip' from the object key

    A key without the suffix is returned unmodified.
    """
    if key.endswith(const.ZIP_SUFFIX):
        return key[:-len(const.ZIP_SUFFIX)]
    return key

def resolve_function_names(record):
    """Determine the functions that an uploaded object should update

    Function names from the object's 'function.names' metadata win over the
    name derived from the object key.

    Args:
        record (Record): The uploaded object

    Returns:
        list[str]: Function names, in the order given

    Raises:
        EmptyFunctionNameError: If any of the resulting names are empty
    """
    function_names = get_function_names_from_md(record.metadata)
    if function_names is not None:
        LOGGER.debug("Function names from object metadata: {}".format(function_names))
        source = 'metadata'
        names = [name.strip() for name in function_names.split(const.FUNCTION_NAMES_SEPARATOR)]
    else:
        source = 'key'
        names = [function_name_from_key(record.object_key)]
        LOGGER.debug("Function name from object key: {}".format(names[0]))

    if any(name == '' for name in names):
        raise EmptyFunctionNameError(record.bucket_name, record.object_key, source)

    return names

def resolve_targets(record):
    """Resolve a record into the targets to dispatch

    Args:
        record (Record): The uploaded object

    Returns:
        list[ResolvedTarget]
    """
    return [ResolvedTarget(name, record.bucket_name, record.object_key)
            for name in resolve_function_names(record)]
