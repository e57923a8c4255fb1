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

from lambdupdate.dispatcher import UpdateOutcome
from lambdupdate.event import Record
from lambdupdate.exceptions import UpdateFailedError, EmptyFunctionNameError
from lambdupdate.results import aggregate, AggregateResult

from .helpers import client_error

class TestAggregate(unittest.TestCase):
    def test_all_succeeded(self):
        outcomes = [UpdateOutcome('a', True, None), UpdateOutcome('b', True, None)]

        result = aggregate(outcomes)

        self.assertTrue(result.succeeded)
        self.assertEqual(['a', 'b'], result.updated)
        self.assertEqual([], result.failures)

    def test_no_outcomes(self):
        self.assertTrue(aggregate([]).succeeded)

    def test_every_failure_listed(self):
        err_b = client_error()
        err_d = RuntimeError('throttled')
        outcomes = [UpdateOutcome('a', True, None),
                    UpdateOutcome('b', False, err_b),
                    UpdateOutcome('c', True, None),
                    UpdateOutcome('d', False, err_d)]

        with self.assertRaises(UpdateFailedError) as cm:
            aggregate(outcomes)

        ex = cm.exception
        self.assertEqual([('b', err_b), ('d', err_d)], ex.failures)
        self.assertEqual(['b', 'd'], ex.function_names)
        self.assertEqual(['a', 'c'], ex.result.updated)
        self.assertIn('b: ', str(ex))
        self.assertIn('d: throttled', str(ex))

    def test_outcome_order_kept(self):
        outcomes = [UpdateOutcome('c', True, None),
                    UpdateOutcome('a', True, None),
                    UpdateOutcome('b', True, None)]

        self.assertEqual(['c', 'a', 'b'], aggregate(outcomes).updated)

    def test_rejected_record_fails(self):
        rec = Record('us-east-1', 'code', '.zip', None)
        err = EmptyFunctionNameError('code', '.zip', 'key')

        with self.assertRaises(UpdateFailedError) as cm:
            aggregate([UpdateOutcome('a', True, None)], [(rec, err)])

        self.assertEqual([], cm.exception.failures)
        self.assertEqual([(rec, err)], cm.exception.rejected)
        self.assertIn('code:.zip', str(cm.exception))

    def test_result_repr(self):
        result = AggregateResult([UpdateOutcome('a', True, None),
                                  UpdateOutcome('b', False, RuntimeError())])

        self.assertFalse(result.succeeded)
        self.assertEqual("AggregateResult(updated=['a'], failed=['b'], rejected=0)", repr(result))
