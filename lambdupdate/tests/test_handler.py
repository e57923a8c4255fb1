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

import io
import os
import unittest
from unittest.mock import patch, MagicMock

from lambdupdate import handler
from lambdupdate.configuration import UpdateConfiguration
from lambdupdate.exceptions import UpdateFailedError, ParseError

from .helpers import FakeUpdater, client_error, record, event

class TestHandler(unittest.TestCase):
    def setUp(self):
        self.updater = FakeUpdater()
        self.config = UpdateConfiguration(COLOR=False, METADATA_LOOKUP=False)
        patcher = patch.object(self.config, 'lambda_updater', return_value=self.updater)
        self.lambda_updater = patcher.start()
        self.addCleanup(patcher.stop)

        stream = patch('sys.stderr', new_callable=io.StringIO)
        stream.start()
        self.addCleanup(stream.stop)

    def test_success(self):
        fn = handler.make_handler(self.config)

        actual = fn(event(record(region='us-west-2', key='svcA.zip')), None)

        self.assertEqual({}, actual)
        self.lambda_updater.assert_called_once_with('us-west-2')
        self.assertEqual([('svcA', 'code', 'svcA.zip')], self.updater.calls)

    def test_failure_raised(self):
        self.updater.failures['fn2'] = client_error()
        fn = handler.make_handler(self.config)
        payload = event(record(key='shared.zip', metadata={'function.names': 'fn1,fn2'}))

        with self.assertRaises(UpdateFailedError) as cm:
            fn(payload, None)

        self.assertEqual(['fn2'], cm.exception.function_names)

    def test_parse_error_raised(self):
        fn = handler.make_handler(self.config)

        with self.assertRaises(ParseError):
            fn({'Records': []}, None)

        self.lambda_updater.assert_not_called()

    @patch.dict(os.environ, {'LAMBDUPDATE_METADATA_LOOKUP': 'false'}, clear=True)
    @patch('lambdupdate.handler.make_handler')
    def test_entrypoint_reads_environment(self, fake_make_handler):
        fake_make_handler.return_value = MagicMock(return_value={})

        actual = handler.handler({'Records': []}, None)

        self.assertEqual({}, actual)
        config = fake_make_handler.call_args[0][0]
        self.assertFalse(config.METADATA_LOOKUP)
        self.assertFalse(config.COLOR)
