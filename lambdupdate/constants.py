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

APP_NAME = 'lambdupdate'

# Object metadata key holding a comma separated list of function names
FUNCTION_NAMES_MD_KEY = 'function.names'
FUNCTION_NAMES_SEPARATOR = ','

ZIP_SUFFIX = '.zip'

# Prefix of the environment variables read by UpdateConfiguration.from_environment()
ENV_PREFIX = 'LAMBDUPDATE_'

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')

# Loggers that are only opened up at the highest CLI verbosity
AWS_LOGGERS = ('boto3', 'botocore', 's3transfer', 'urllib3')
