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
"""Provide functions to validate and generate a Kafka reassignment plan"""
from __future__ import annotations

import logging
from collections import Counter

from typing_extensions import TypedDict


_log = logging.getLogger(__name__)


class PartitionDict(TypedDict):
    topic: str
    partition: int
    replicas: list[int]


class PlanDict(TypedDict):
    version: int
    partitions: list[PartitionDict]


def plan_to_assignment(plan: PlanDict) -> dict[tuple[str, int], list[int]]:
    """Convert the plan to the (topic, partition): replicas format."""
    assignment = {}
    for elem in plan['partitions']:
        assignment[
            (elem['topic'], elem['partition'])
        ] = elem['replicas']
    return assignment


def assignment_to_plan(assignment: dict[tuple[str, int], list[int]]) -> PlanDict:
    """Convert an assignment to the format used by Kafka to
    describe a reassignment plan.
    """
    return {
        'version': 1,
        'partitions':
        [{'topic': t_p[0],
          'partition': t_p[1],
          'replicas': replica
          } for t_p, replica in assignment.items()]
    }


def validate_plan(plan: PlanDict, allow_duplicate_replicas: bool = False) -> bool:
    """Verify that the plan is valid for execution.

    Given kafka-reassignment plan should affirm with following rules:
    - Correct format of plan
    - No duplicate partitions in the plan
    - Replication-factor for each partition of same topic is same
    - No duplicate broker-ids in each replicas
    """
    if not _validate_format(plan):
        return False

    partition_names = Counter(
        (p_data['topic'], p_data['partition'])
        for p_data in plan['partitions']
    )
    duplicate_partitions = [t_p for t_p, count in partition_names.items() if count > 1]
    if duplicate_partitions:
        _log.error(
            'Duplicate partitions in plan: {p_list}'
            .format(p_list=duplicate_partitions),
        )
        return False

    # Verify no duplicate brokers in partition replicas
    if not allow_duplicate_replicas:
        for p_data in plan['partitions']:
            if len(p_data['replicas']) != len(set(p_data['replicas'])):
                _log.error(
                    'Duplicate replicas found for partition {topic}-{partition}: '
                    '{replicas}'.format(
                        topic=p_data['topic'],
                        partition=p_data['partition'],
                        replicas=p_data['replicas'],
                    ),
                )
                return False

    # Verify same replication-factor for every topic
    topic_replication_factor: dict[str, int] = {}
    for p_data in plan['partitions']:
        topic = p_data['topic']
        rf = len(p_data['replicas'])
        if topic_replication_factor.setdefault(topic, rf) != rf:
            _log.error(
                'Mismatch in replication-factor of partitions for topic '
                '{topic}'.format(topic=topic),
            )
            return False
    return True


def _validate_format(plan: PlanDict) -> bool:
    """Validate if the format of the plan as expected.

    Validate format of plan on following rules:
    a) Verify if it ONLY and MUST have keys and value, 'version' and 'partitions'
    b) Verify if each value of 'partitions' ONLY and MUST have keys 'replicas',
        'partition', 'topic'
    c) Verify desired type of each value
    d) Verify non-empty partitions and replicas
    Sample-plan format:
    {
        "version": 1,
        "partitions": [
            {"partition":0, "topic":'t1', "replicas":[0,1,2]},
            {"partition":0, "topic":'t2', "replicas":[1,2]},
            ...
        ]}
    """
    # Verify presence of required keys
    if set(plan.keys()) != {'version', 'partitions'}:
        _log.error(
            'Invalid or incomplete keys in given plan. Expected: "version", '
            '"partitions". Found:{keys}'
            .format(keys=', '.join(list(plan.keys()))),
        )
        return False

    # Invalid version
    if plan['version'] != 1:
        _log.error(
            'Invalid version of plan {version}'
            .format(version=plan['version']),
        )
        return False

    # Invalid partitions type
    if not isinstance(plan['partitions'], list):
        _log.error('"partitions" of type list expected.')  # type: ignore[unreachable]
        return False

    # Empty partitions
    if not plan['partitions']:
        _log.error('"partitions" list found empty"')
        return False

    # Invalid partition-data
    for p_data in plan['partitions']:
        if set(p_data.keys()) != {'topic', 'partition', 'replicas'}:
            _log.error(
                'Invalid keys in partition-data {keys}'
                .format(keys=', '.join(list(p_data.keys()))),
            )
            return False
        # Check types
        if not isinstance(p_data['topic'], str):
            _log.error(  # type: ignore[unreachable]
                '"topic" of type str expected {p_data}, found {t_type}'
                .format(p_data=p_data, t_type=type(p_data['topic'])),
            )
            return False
        if not isinstance(p_data['partition'], int):
            _log.error(  # type: ignore[unreachable]
                '"partition" of type int expected {p_data}, found {p_type}'
                .format(p_data=p_data, p_type=type(p_data['partition'])),
            )
            return False
        if not isinstance(p_data['replicas'], list):
            _log.error(  # type: ignore[unreachable]
                '"replicas" of type list expected {p_data}, found {r_type}'
                .format(p_data=p_data, r_type=type(p_data['replicas'])),
            )
            return False
        if not p_data['replicas']:
            _log.error(
                'Non-empty "replicas" expected: {p_data}'
                .format(p_data=p_data),
            )
            return False
        # Invalid broker-type
        for broker in p_data['replicas']:
            if not isinstance(broker, int):
                _log.error(  # type: ignore[unreachable]
                    '"replicas" of type integer list expected {p_data}'
                    .format(p_data=p_data),
                )
                return False
    return True
