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
Update existing lambda functions from a code zip already in S3, without
waiting for the bucket notification.

The same pipeline as the Lambda handler is run against an event built from
the command line arguments. Unless --function-names is given the function
names are read from the object's 'function.names' metadata, falling back to
the object key without its '.zip' suffix.
"""

import sys
import logging

from . import console
from . import constants as const
from .configuration import UpdateParser, UpdateCLI
from .event import create_event
from .exceptions import LambdUpdateError, UpdateFailedError
from .update import update

LOGGER = logging.getLogger(__name__)

class LambdUpdateCLI(UpdateCLI):
    def get_parser(self, ParentParser=UpdateParser):
        self.parser = ParentParser(prog = const.APP_NAME,
                                   description = 'Script for pointing lambda functions ' +
                                                 'at a new code zip in S3. To supply ' +
                                                 'arguments from a file, provide the ' +
                                                 "filename prepended with an '@'",
                                   fromfile_prefix_chars = '@')
        self.parser.add_configuration()
        self.parser.add_argument('--region', '-r',
                                 required = True,
                                 help = 'AWS region')
        self.parser.add_argument('--bucket', '-b',
                                 required = True,
                                 help = 'S3 bucket name')
        self.parser.add_argument('--key', '-k',
                                 required = True,
                                 help = 'S3 key name')
        self.parser.add_argument('--function-names', '-f',
                                 default = None,
                                 help = 'Comma separated function names, overrides ' +
                                        'the object metadata and key')
        return self.parser

    def run(self, args):
        config = args.config
        config.setup_logging(args.verbosity)
        LOGGER.debug("Args: {}".format(args))

        payload = create_event(args.region, args.bucket, args.key, args.function_names)
        updater_factory, lookup_factory = config.capabilities()

        try:
            result = update(payload, updater_factory, lookup_factory)
        except UpdateFailedError as ex:
            console.error(str(ex))
            if ex.result is not None and ex.result.updated:
                console.info("Updated: {}".format(', '.join(ex.result.updated)))
            return 1
        except LambdUpdateError as ex:
            console.error(str(ex))
            return 1

        console.info("Updated: {}".format(', '.join(result.updated)))
        return 0

def main(argv=None):
    cli = LambdUpdateCLI()
    sys.exit(cli.main(argv))

if __name__ == '__main__':
    main()
