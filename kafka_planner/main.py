# Copyright 2016 Yelp Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import argparse
import configparser
import logging
import sys
from logging.config import fileConfig

from kafka_planner import __version__
from kafka_planner.cmds.plan import PlanCmd
from kafka_planner.cmds.stats import StatsCmd
from kafka_planner.util.config import get_planner_config
from kafka_planner.util.error import ConfigurationError

_log = logging.getLogger()


def parse_args(argv=None):
    """Parse the arguments."""
    parser = argparse.ArgumentParser(
        description='Plan the placement of partition replicas over a set of'
        ' brokers of a cluster.',
    )
    parser.add_argument(
        '-v',
        '--version',
        action='version',
        version="%(prog)s {}".format(__version__),
    )
    parser.add_argument(
        '--snapshot',
        '-s',
        dest='snapshot',
        metavar='<snapshot-file-path>',
        help='Path of the yaml or json file describing brokers, topics, '
        'partitions and log-dir sizes of the cluster.',
        type=str,
        required=True,
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path of the planner configuration. Default try: '
        '$KAFKA_PLANNER_CONFIG_DIR/planner.yaml, '
        '$HOME/.kafka_planner/planner.yaml, /etc/kafka_planner/planner.yaml',
    )
    parser.add_argument(
        '--logconf',
        type=str,
        help='Path to logging configuration file. Default: log to console.',
    )

    subparsers = parser.add_subparsers()
    subparsers.required = True
    PlanCmd().add_subparser(subparsers)
    StatsCmd().add_subparser(subparsers)

    return parser.parse_args(argv)


def exception_logger(exc_type, exc_value, exc_traceback):
    """Log unhandled exceptions"""
    if not issubclass(exc_type, KeyboardInterrupt):  # do not log Ctrl-C
        _log.critical(
            "Uncaught exception:",
            exc_info=(exc_type, exc_value, exc_traceback)
        )
    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def configure_logging(log_conf=None, log_unhandled_exceptions=True):
    if log_conf:
        try:
            fileConfig(log_conf, disable_existing_loggers=False)
        except configparser.NoSectionError:
            logging.basicConfig(level=logging.INFO)
            _log.error(
                'Failed to load {logconf} file.'
                .format(logconf=log_conf),
            )
    else:
        logging.basicConfig(level=logging.INFO)
    if log_unhandled_exceptions:
        sys.excepthook = exception_logger


def run(argv=None):
    args = parse_args(argv)

    configure_logging(args.logconf)

    try:
        planner_config = get_planner_config(args.config)
    except ConfigurationError as e:
        _log.error("Invalid planner configuration: %s", e)
        sys.exit(1)

    args.command(planner_config, args)
