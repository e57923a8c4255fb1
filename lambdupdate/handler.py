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

from .configuration import UpdateConfiguration
from .update import update

LOGGER = logging.getLogger(__name__)

def make_handler(config):
    """Create a Lambda handler bound to the given configuration

    Args:
        config (UpdateConfiguration): Settings for every invocation

    Returns:
        function: handler(event, context)
    """
    def handler_(event, context):
        config.setup_logging()
        updater_factory, lookup_factory = config.capabilities()

        # Any error is raised so Lambda's retry and dead letter handling applies
        result = update(event, updater_factory, lookup_factory)
        LOGGER.info("Updated {} function(s)".format(len(result.updated)))
        return {}
    return handler_

def handler(event, context):
    """Lambda entrypoint, triggered by S3 object created notifications

    Configuration is read from the LAMBDUPDATE_* environment variables of the
    function on every invocation.
    """
    config = UpdateConfiguration.from_environment(COLOR=False)
    return make_handler(config)(event, context)
