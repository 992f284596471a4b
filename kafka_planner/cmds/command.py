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
from __future__ import annotations

import argparse
import json
import logging
import sys

from kafka_planner.reassignment.broker import Broker
from kafka_planner.reassignment.snapshot import ClusterSnapshot
from kafka_planner.reassignment.snapshot import load_snapshot
from kafka_planner.util.config import PlannerConfig
from kafka_planner.util.error import ConfigurationError
from kafka_planner.util.validation import PlanDict


class PlannerCmd:
    """Interface used by all kafka-reassign-planner commands
    The attributes planner_config, args, brokers and snapshot are
    initialized on run().
    """

    log = logging.getLogger("ReassignPlanner")

    def __init__(self) -> None:
        self.planner_config: PlannerConfig | None = None
        self.args: argparse.Namespace | None = None
        self.brokers: list[Broker] = []
        self.snapshot: ClusterSnapshot | None = None

    def build_subparser(self, subparsers):
        """Build the command subparser.

        :param subparsers: argpars subparsers
        :returns: subparser
        """
        raise NotImplementedError("Implement in subclass")

    def run_command(self) -> None:
        """Implement the command logic.
        When run_command is called planner_config, args, brokers and
        snapshot are already initialized.
        """
        raise NotImplementedError("Implement in subclass")

    def run(self, planner_config: PlannerConfig, args: argparse.Namespace) -> None:
        """Load the cluster snapshot then call run_command."""
        self.planner_config = planner_config
        self.args = args
        try:
            self.brokers, self.snapshot = load_snapshot(args.snapshot)
        except ConfigurationError as e:
            self.log.error("Could not load cluster snapshot: %s", e)
            sys.exit(1)
        self.log.debug(
            'Starting %s with %s brokers from %s',
            self.__class__.__name__,
            len(self.brokers),
            args.snapshot,
        )
        if not self.brokers:
            self.log.info("The cluster has no brokers. No actions to perform.")
            return
        self.run_command()

    def add_subparser(self, subparsers) -> None:
        self.build_subparser(subparsers).set_defaults(command=self.run)

    def write_json_plan(self, plan: PlanDict, plan_file: str) -> None:
        """Dump proposed json plan to given output file for future usage."""
        with open(plan_file, 'w') as output:
            json.dump(plan, output)
