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
from kafka_planner.reassignment.coordinator import ReassignmentCoordinator
from kafka_planner.reassignment.coordinator import to_assignment
from kafka_planner.reassignment.display import log_plan_stats
from kafka_planner.reassignment.error import ReassignmentError
from kafka_planner.reassignment.placer import DiskComparison
from kafka_planner.reassignment.stats import get_plan_stats
from kafka_planner.reassignment.topic import TopicSelection
from kafka_planner.reassignment.usage import ResetPolicy
from kafka_planner.util import broker_id_list
from kafka_planner.util import print_json
from kafka_planner.util import topic_partitions
from kafka_planner.util.validation import assignment_to_plan
from kafka_planner.util.validation import validate_plan


class PlanCmd(PlannerCmd):

    def __init__(self) -> None:
        super().__init__()
        self.log = logging.getLogger(self.__class__.__name__)

    def build_subparser(self, subparsers):
        subparser = subparsers.add_parser(
            'plan',
            description='Compute a reassignment plan for the selected partitions.',
            help='This command computes where the replicas of the selected '
            'partitions should be placed among the target brokers. Replicas '
            'of each topic are spread evenly; among equally loaded brokers the '
            'current replica holders are preferred, then brokers in the same '
            'rack, then brokers with fewer replicas and less disk usage. The '
            'plan is printed in the kafka-reassign-partitions json format.',
        )
        subparser.add_argument(
            '--topic',
            dest='topics',
            metavar='<topic>[:<partition>,...]',
            type=topic_partitions,
            action='append',
            required=True,
            help='Topic to reassign, optionally restricted to the given '
            'partitions. Can be repeated; topics are planned in the given order.',
        )
        subparser.add_argument(
            '--target-brokers',
            metavar='<broker-id>,...',
            type=broker_id_list,
            required=True,
            help='Comma separated ids of the brokers eligible to host replicas.',
        )
        subparser.add_argument(
            '--reset-policy',
            choices=[policy.value for policy in ResetPolicy],
            help='Whether the footprint of the selected partitions is '
            'subtracted from the target brokers before planning. '
            'Overrides the planner configuration.',
        )
        subparser.add_argument(
            '--disk-comparison',
            choices=[mode.value for mode in DiskComparison],
            help='How disk usage breaks ties between brokers. '
            'Overrides the planner configuration.',
        )
        subparser.add_argument(
            '--write-to-file',
            dest='proposed_plan_file',
            metavar='<reassignment-plan-file-path>',
            type=str,
            help='Write the partition reassignment plan to a json file.',
        )
        return subparser

    def get_selections(self) -> list[TopicSelection]:
        """Resolve the --topic arguments against the snapshot."""
        assert self.snapshot is not None and self.args is not None
        if not self.snapshot.available:
            self.log.error("Topics are not available in the cluster snapshot.")
            sys.exit(1)
        selections = []
        topic_ids = [topic_id for topic_id, _ in self.args.topics]
        duplicate_topics = sorted(
            topic_id for topic_id in set(topic_ids)
            if topic_ids.count(topic_id) > 1
        )
        if duplicate_topics:
            self.log.error(
                "Topics {topics} given more than once. Exiting."
                .format(topics=', '.join(duplicate_topics)),
            )
            sys.exit(1)
        for topic_id, partition_ids in self.args.topics:
            topic = self.snapshot.get_topic(topic_id)
            if topic is None:
                self.log.error(
                    "Topic {topic} not found or not readable. Exiting."
                    .format(topic=topic_id),
                )
                sys.exit(1)
            if partition_ids is None:
                selections.append(TopicSelection(topic, list(topic.partitions)))
                continue
            partitions = []
            for partition_id in partition_ids:
                partition = topic.get_partition(partition_id)
                if partition is None:
                    self.log.error(
                        "Partition {topic}-{partition} not found. Exiting."
                        .format(topic=topic_id, partition=partition_id),
                    )
                    sys.exit(1)
                partitions.append(partition)
            selections.append(TopicSelection(topic, partitions))
        return selections

    def run_command(self) -> None:
        assert self.planner_config is not None and self.args is not None
        selections = self.get_selections()
        reset_policy = self.planner_config.reset_policy
        if self.args.reset_policy:
            reset_policy = ResetPolicy(self.args.reset_policy)
        disk_comparison = self.planner_config.disk_comparison
        if self.args.disk_comparison:
            disk_comparison = DiskComparison(self.args.disk_comparison)

        coordinator = ReassignmentCoordinator(reset_policy, disk_comparison)
        try:
            plan = coordinator.plan(
                selections,
                self.brokers,
                self.args.target_brokers,
                self.snapshot,
            )
        except ReassignmentError as e:
            self.log.error("Reassignment plan could not be computed: %s", e)
            sys.exit(1)

        assignment = to_assignment(plan.assignments)
        if not assignment:
            self.log.info("No partitions to reassign.")
            return
        base_assignment = {
            partition.name: partition.replicas
            for selection in selections
            for partition in selection.partitions
        }
        log_plan_stats(get_plan_stats(plan.targets, base_assignment, assignment))

        proposed_plan = assignment_to_plan(assignment)
        allow_duplicate_replicas = any(
            selection.topic.replication_factor > len(plan.targets)
            for selection in selections
        )
        if not validate_plan(proposed_plan, allow_duplicate_replicas):
            self.log.error('Invalid proposed-plan.')
            sys.exit(1)
        if self.args.proposed_plan_file:
            self.log.info(
                'Storing proposed-plan in %s',
                self.args.proposed_plan_file,
            )
            self.write_json_plan(proposed_plan, self.args.proposed_plan_file)
        self.log.info(
            'Proposed-plan actions count: %s',
            len(proposed_plan['partitions']),
        )
        print_json(proposed_plan)
