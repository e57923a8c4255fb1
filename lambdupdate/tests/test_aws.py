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

import unittest
from unittest.mock import MagicMock

import botocore.exceptions

from lambdupdate.aws import LambdaCodeUpdater, S3MetadataLookup

from .helpers import client_error

class TestLambdaCodeUpdater(unittest.TestCase):
    def test_update_code(self):
        client = MagicMock()
        updater = LambdaCodeUpdater(client)

        updater.update_code('svc', 'code', 'svc.zip')

        client.update_function_code.assert_called_once_with(FunctionName='svc',
                                                             S3Bucket='code',
                                                             S3Key='svc.zip',
                                                             Publish=False)

    def test_publish(self):
        client = MagicMock()

        LambdaCodeUpdater(client, publish=True).update_code('svc', 'code', 'svc.zip')

        self.assertTrue(client.update_function_code.call_args[1]['Publish'])

    def test_error_raised(self):
        client = MagicMock()
        client.update_function_code.side_effect = client_error()

        with self.assertRaises(botocore.exceptions.ClientError):
            LambdaCodeUpdater(client).update_code('svc', 'code', 'svc.zip')

    def test_from_session(self):
        session = MagicMock()

        updater = LambdaCodeUpdater.from_session(session, publish=True)

        session.client.assert_called_once_with('lambda')
        self.assertIs(session.client.return_value, updater.client)
        self.assertTrue(updater.publish)

class TestS3MetadataLookup(unittest.TestCase):
    def test_metadata(self):
        client = MagicMock()
        client.head_object.return_value = {'ContentLength': 10,
                                           'Metadata': {'function.names': 'foo,bar'}}

        actual = S3MetadataLookup(client).lookup('bucket', 'key')

        self.assertEqual({'function.names': 'foo,bar'}, actual)
        client.head_object.assert_called_once_with(Bucket='bucket', Key='key')

    def test_no_metadata(self):
        client = MagicMock()
        client.head_object.return_value = {'ContentLength': 10}

        self.assertIsNone(S3MetadataLookup(client).lookup('bucket', 'key'))

    def test_head_object_error(self):
        client = MagicMock()
        client.head_object.side_effect = client_error('403', 'Forbidden', 'HeadObject')

        with self.assertLogs('lambdupdate.aws', level='INFO') as cm:
            actual = S3MetadataLookup(client).lookup('bucket', 'key')

        self.assertIsNone(actual)
        self.assertIn('will use object key', cm.output[-1])

    def test_from_session(self):
        session = MagicMock()

        S3MetadataLookup.from_session(session)

        session.client.assert_called_once_with('s3')
