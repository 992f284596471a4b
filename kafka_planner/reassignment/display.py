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

import humanfriendly

from .stats import PlanStats
from .usage import BrokerUsage

_log = logging.getLogger('kafka-reassign-planner')


def display_table(headers: list[str], table: list[list[str]]) -> None:
    """Print a formatted table.

    :param headers: A list of header objects that are displayed in the first
        row of the table.
    :param table: A list of lists where each sublist is a row of the table.
        The number of elements in each row should be equal to the number of
        headers.
    """
    assert all(len(row) == len(headers) for row in table)

    str_headers = [str(header) for header in headers]
    str_table = [[str(cell) for cell in row] for row in table]
    column_lengths = [
        max(len(header), *(len(row[i]) for row in str_table))
        for i, header in enumerate(str_headers)
    ]

    print(
        " | ".join(
            str(header).ljust(length)
            for header, length in zip(str_headers, column_lengths)
        )
    )
    print("-+-".join("-" * length for length in column_lengths))
    for row in str_table:
        print(
            " | ".join(
                str(cell).ljust(length)
                for cell, length in zip(row, column_lengths)
            )
        )


def display_broker_usage(usages: list[BrokerUsage]) -> None:
    """Print replica count and disk usage of each broker."""
    display_table(
        ['Broker', 'Rack', 'Replicas', 'Log-dir size', 'Reported disk usage'],
        [
            [
                usage.id,
                usage.rack or '-',
                usage.actual_replicas,
                humanfriendly.format_size(usage.actual_size, binary=True),
                humanfriendly.format_size(usage.broker.log_dir_size, binary=True),
            ]
            for usage in usages
        ],
    )


def log_plan_stats(plan_stats: PlanStats) -> None:
    """Log the balance of the target brokers after the plan."""
    for broker_id, count in plan_stats.replica_counts.items():
        _log.info(
            'Broker %s: %s replicas, %s',
            broker_id,
            count,
            humanfriendly.format_size(plan_stats.sizes[broker_id], binary=True),
        )
    _log.info(
        'Replica movements: %s. Net replica imbalance: %s. '
        'Replica count CV: %.3f. Size CV: %.3f.',
        plan_stats.movement_count,
        plan_stats.net_imbalance,
        plan_stats.replica_count_cv,
        plan_stats.size_cv,
    )
