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

import logging
import sys

from .command import PlannerCmd
from kafka_planner.reassignment.display import display_broker_usage
from kafka_planner.reassignment.error import ReassignmentError
from kafka_planner.reassignment.stats import get_net_imbalance
from kafka_planner.reassignment.usage import BrokerUsage


class StatsCmd(PlannerCmd):

    def __init__(self) -> None:
        super().__init__()
        self.log = logging.getLogger(self.__class__.__name__)

    def build_subparser(self, subparsers):
        subparser = subparsers.add_parser(
            'stats',
            description='Show replica count and disk usage of each broker.',
            help='This command displays the number of replicas and the '
            'log-dir size of each broker, as tracked from the cluster snapshot.',
        )
        return subparser

    def run_command(self) -> None:
        try:
            usages = [
                BrokerUsage.from_snapshot(broker, self.snapshot)
                for broker in self.brokers
            ]
        except ReassignmentError as e:
            self.log.error("Broker usage could not be computed: %s", e)
            sys.exit(1)
        display_broker_usage(usages)
        print(
            '\nNet replica imbalance: {imbalance}'.format(
                imbalance=get_net_imbalance(
                    [usage.actual_replicas for usage in usages],
                ),
            )
        )
