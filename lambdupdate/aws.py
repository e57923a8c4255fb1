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

"""boto3 backed implementations of the capabilities used by lambdupdate.update()

Both classes take a client that was created from a region scoped session, see
UpdateConfiguration.lambda_updater() and UpdateConfiguration.metadata_lookup().
"""

import logging

import botocore

from .dispatcher import FunctionUpdater

LOGGER = logging.getLogger(__name__)

class LambdaCodeUpdater(FunctionUpdater):
    """Update function code through the Lambda API

    boto3 clients are thread safe, so a single client is shared by all of the
    dispatcher's worker threads.
    """
    def __init__(self, client, publish=False):
        self.client = client
        self.publish = publish

    @classmethod
    def from_session(cls, session, publish=False):
        return cls(session.client('lambda'), publish)

    def update_code(self, function_name, source_bucket, source_key):
        resp = self.client.update_function_code(FunctionName=function_name,
                                                S3Bucket=source_bucket,
                                                S3Key=source_key,
                                                Publish=self.publish)
        LOGGER.debug("Update Function Code Response: {}".format(resp))
        return resp

class MetadataLookup(object):
    """Interface for reading an object's user metadata"""
    def lookup(self, bucket, key):
        """
        Returns:
            optional[dict]: The metadata, or None if it could not be read
        """
        raise NotImplementedError()

class S3MetadataLookup(MetadataLookup):
    def __init__(self, client):
        self.client = client

    @classmethod
    def from_session(cls, session):
        return cls(session.client('s3'))

    def lookup(self, bucket, key):
        """Read the object's metadata with a HeadObject request

        A failed request is not an error, the caller falls back to deriving
        the function name from the object key.
        """
        LOGGER.debug("Head Object: {}:{}".format(bucket, key))
        try:
            resp = self.client.head_object(Bucket=bucket, Key=key)
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as ex:
            LOGGER.info("Head Object Failed for {}:{} - will use object key for function name ({})".format(
                bucket, key, ex))
            return None

        LOGGER.info("Head Object Succeeded: {}:{}".format(bucket, key))
        metadata = resp.get('Metadata')
        LOGGER.debug("Object Metadata: {}".format(metadata))
        return metadata
