# Copyright 2018 The Johns Hopkins University Applied Physics Laboratory
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

import os
import sys
from argparse import ArgumentParser
from pprint import pformat

import yaml
from boto3.session import Session

from . import exceptions
from . import constants as const
from . import console
from .aws import LambdaCodeUpdater, S3MetadataLookup

def to_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "y"}

class UpdateConfiguration(object):
    """Settings for one invocation of the update pipeline

    Values are looked up from the keyword arguments given to the constructor,
    falling back to the defaults. Attribute access (config.LOG_LEVEL) and
    config.get('LOG_LEVEL') are both supported.
    """
    __EXPECTED_KEYS = [
        'LOG_LEVEL', # Optional
        'PROFILE', # Optional, no default
        'PUBLISH', # Optional
        'METADATA_LOOKUP', # Optional
        'COLOR', # Optional
    ]

    __DEFAULTS = {
        'LOG_LEVEL': 'INFO',
        'PUBLISH': False,
        'METADATA_LOOKUP': True,
        'COLOR': True,
    }

    __BOOLEANS = ('PUBLISH', 'METADATA_LOOKUP', 'COLOR')

    def __init__(self, **kwargs):
        self._config = {}
        for key, value in kwargs.items():
            if value is None:
                continue # Not given, use the default
            key = key.upper()
            if key not in self.__EXPECTED_KEYS:
                console.warning("Extra variable '{}' defined".format(key))
            if key in self.__BOOLEANS:
                value = to_bool(value)
            self._config[key] = value

        if not self.verify():
            raise exceptions.ConfigurationError("Configuration is not valid")

    @classmethod
    def from_environment(cls, environ=None, **overrides):
        """Build the configuration from LAMBDUPDATE_* environment variables

        AWS_PROFILE is used for the profile, as boto3 does.

        Args:
            environ (optional[dict]): Defaults to os.environ
            overrides (dict): Values that win over the environment
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        for key in cls.__EXPECTED_KEYS:
            name = const.ENV_PREFIX + key
            if name in environ:
                kwargs[key] = environ[name]
        if 'PROFILE' not in kwargs and environ.get('AWS_PROFILE'):
            kwargs['PROFILE'] = environ['AWS_PROFILE']

        kwargs.update({k.upper(): v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path, **overrides):
        """Build the configuration from a YAML file

        Args:
            path (str): YAML file containing a mapping of configuration keys
            overrides (dict): Values that win over the file

        Raises:
            ConfigurationError: If the file cannot be read or is not a mapping
        """
        try:
            with open(path, 'r') as fh:
                data = yaml.safe_load(fh.read())
        except (OSError, yaml.YAMLError) as ex:
            raise exceptions.ConfigurationError("Problem loading configuration file '{}': {}".format(path, ex))

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise exceptions.ConfigurationError("Configuration file '{}' must contain a mapping".format(path))

        kwargs = {str(k).upper(): v for k, v in data.items()}
        kwargs.update({k.upper(): v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        if attr in self._config:
            return self._config[attr]
        elif attr in self.__DEFAULTS:
            return self.__DEFAULTS[attr]
        else:
            msg = "'{}' object has not attribute '{}'".format(self.__class__.__name__,
                                                              attr)
            raise AttributeError(msg)

    def get(self, key, default=None):
        try:
            return self.__getattr__(key)
        except AttributeError:
            return default

    def __repr__(self):
        return "UpdateConfiguration({})".format(self._config)

    def verify(self, fh=sys.stderr):
        ret = True
        try:
            console.get_level(self.LOG_LEVEL)
        except exceptions.ConfigurationError as ex:
            console.error(str(ex), file=fh)
            ret = False

        profile = self.get('PROFILE')
        if profile is not None and not isinstance(profile, str):
            console.error("Variable 'PROFILE' must be a string", file=fh)
            ret = False

        return ret

    def display(self, fh=sys.stdout):
        for key in self.__EXPECTED_KEYS:
            try:
                val = pformat(self.__getattr__(key))
                print("{} = {}".format(key, val), file=fh)
            except AttributeError:
                if key == 'PROFILE':
                    pass
                else:
                    raise

    def setup_logging(self, verbosity=0, stream=None):
        """Configure the console logging

        Args:
            verbosity (int): 1 or more forces debug logging, 2 or more also
                             enables boto3 / botocore debug logging
        """
        level = 'DEBUG' if verbosity > 0 else self.LOG_LEVEL
        return console.setup_logging(level,
                                     color=self.COLOR,
                                     stream=stream,
                                     aws_debug=verbosity > 1)

    def session(self, region):
        return Session(profile_name=self.get('PROFILE'),
                       region_name=region)

    def lambda_updater(self, region):
        return LambdaCodeUpdater.from_session(self.session(region), self.PUBLISH)

    def metadata_lookup(self, region):
        return S3MetadataLookup.from_session(self.session(region))

    def capabilities(self):
        """Get the factories that lambdupdate.update() uses to create its clients

        Returns:
            tuple[callable, optional[callable]]: updater_factory, lookup_factory
        """
        lookup_factory = self.metadata_lookup if self.METADATA_LOOKUP else None
        return self.lambda_updater, lookup_factory

class UpdateParser(ArgumentParser):
    """A custom argument parser that provides common handling of building the
    UpdateConfiguration from the command line arguments
    """
    _configuration = False

    def add_configuration(self):
        """Adds '--config', '--profile', '--publish', '--no-metadata-lookup'
        and '-v' arguments to the parser
        """
        self._configuration = True
        self.add_argument('--config', '-c',
                          metavar = '<file>',
                          default = os.environ.get(const.ENV_PREFIX + 'CONFIG'),
                          help = 'YAML configuration file (default: {}CONFIG)'.format(const.ENV_PREFIX))
        self.add_argument('--profile',
                          default = None,
                          help = 'AWS credentials profile to use')
        self.add_argument('--publish',
                          action = 'store_true',
                          default = None,
                          help = 'Publish a new version of each function after updating')
        self.add_argument('--no-metadata-lookup',
                          dest = 'metadata_lookup',
                          action = 'store_false',
                          default = None,
                          help = "Don't read function names from the object's metadata")
        self.add_argument('--verbose', '-v',
                          dest = 'verbosity',
                          action = 'count',
                          default = 0,
                          help = 'Verbose mode (-v for debug, -vv for AWS debug logging)')

    def parse_args(self, *args, **kwargs):
        """Calls the underlying 'parse_args()' method and then builds the
        UpdateConfiguration, stored as 'config' on the returned object

        This method will exit with a usage message and error message if the
        configuration is not valid.
        """
        a = super().parse_args(*args, **kwargs)

        if not self._configuration:
            return a

        overrides = {
            'PROFILE': a.profile,
            'PUBLISH': a.publish,
            'METADATA_LOOKUP': a.metadata_lookup,
            'COLOR': sys.stderr.isatty(),
        }

        try:
            if a.config:
                a.config = UpdateConfiguration.from_file(a.config, **overrides)
            else:
                a.config = UpdateConfiguration.from_environment(**overrides)
        except exceptions.ConfigurationError as ex:
            self.error(str(ex))

        return a

class UpdateCLI(object):
    """Interface for defining a CLI application / script"""
    def get_parser(self, ParentParser=UpdateParser):
        """Create and return the parser for this application

        Returns:
            UpdateParser: The parser instance created and populated
        """
        raise NotImplementedError()

    def run(self, args):
        """The main entrpoint for the application

        Args:
            args (Namespace): The parsed results for the application to use

        Returns:
            optional[int]: Return code
        """
        raise NotImplementedError()

    def main(self, argv=None):
        """Application entrypoint that parsers the arguments and calls `run()`"""
        parser = self.get_parser()
        args = parser.parse_args(argv)
        return self.run(args)
