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
"""This files contains supporting api's required to evaluate the balance of
a reassignment plan.
"""
from __future__ import annotations

from math import sqrt
from typing import NamedTuple
from typing import Sequence

from .usage import BrokerUsage


def compute_optimum(groups: int, elements: int) -> tuple[int, int]:
    """Compute the number of elements per group and the remainder.

        :param elements: total number of elements
        :param groups: total number of groups
    """
    return elements // groups, elements % groups


def mean(data: Sequence[float]) -> float:
    """Return the mean of a sequence of numbers."""
    return sum(data) / len(data)


def variance(data: Sequence[float], data_mean: float | None = None) -> float:
    """Return variance of a sequence of numbers.
    :param data_mean: Precomputed mean of the sequence.
    """
    data_mean = data_mean or mean(data)
    return sum((x - data_mean) ** 2 for x in data) / len(data)


def standard_deviation(
    data: Sequence[float],
    data_mean: float | None = None,
    data_variance: float | None = None,
) -> float:
    """Return standard deviation of a sequence of numbers.
    :param data_mean: Precomputed mean of the sequence.
    :param data_variance: Precomputed variance of the sequence.
    """
    data_variance = data_variance or variance(data, data_mean)
    return sqrt(data_variance)


def coefficient_of_variation(
    data: Sequence[float],
    data_mean: float | None = None,
    data_stdev: float | None = None,
) -> float:
    """Return the coefficient of variation (CV) of a sequence of numbers.
    :param data_mean: Precomputed mean of the sequence.
    :param data_stdev: Precomputed standard_deviation of the sequence.
    """
    data_mean = data_mean or mean(data)
    data_stdev = data_stdev or standard_deviation(data, data_mean)
    if data_mean == 0:
        return float("inf") if data_stdev != 0 else 0
    else:
        return data_stdev / data_mean


def get_extra_element_count(curr_count: int, opt_count: int, extra_allowed_cnt: int) -> tuple[int, int]:
    """Evaluate and return extra same element count based on given values.

    :key-term:
    group:  brokers while placing replicas (elements).

    :params:
    curr_count: Given count
    opt_count:  Optimal count for each group.
    extra_allowed_cnt:  Count of groups which can have 1 extra element
    """
    if curr_count > opt_count:
        # We still can allow 1 extra count
        if extra_allowed_cnt > 0:
            extra_allowed_cnt -= 1
            extra_cnt = curr_count - opt_count - 1
        else:
            extra_cnt = curr_count - opt_count
    else:
        extra_cnt = 0
    return extra_cnt, extra_allowed_cnt


def get_net_imbalance(count_per_broker: list[int]) -> int:
    """Calculate and return net imbalance based on given count of
    replicas per broker.

    Net-imbalance implies total number of extra replicas from optimal count
    over all brokers. This is also the minimum number of replica movements
    required for overall balancing.
    """
    net_imbalance = 0
    opt_count, extra_allowed = \
        compute_optimum(len(count_per_broker), sum(count_per_broker))
    for count in sorted(count_per_broker, reverse=True):
        extra_cnt, extra_allowed = \
            get_extra_element_count(count, opt_count, extra_allowed)
        net_imbalance += extra_cnt
    return net_imbalance


def calculate_replica_movement(
    prev_assignment: dict[tuple[str, int], list[int]],
    curr_assignment: dict[tuple[str, int], list[int]],
) -> tuple[dict[tuple[str, int], tuple[set[int], set[int]]], int]:
    """Calculate the replica movements from initial to current assignment.
    Algorithm:
        For each partition in current assignment
            # If replica set different in initial assignment:
                # Get Difference in sets
    :rtype: tuple
    dict((partition,  (from_broker_set, to_broker_set)), total_movements
    """
    total_movements = 0
    movements = {}
    for partition, curr_replicas in curr_assignment.items():
        prev_replicas = prev_assignment.get(partition, [])
        diff = len(set(curr_replicas) - set(prev_replicas))
        if diff:
            total_movements += diff
            movements[partition] = (
                (set(prev_replicas) - set(curr_replicas)),
                (set(curr_replicas) - set(prev_replicas)),
            )
    return movements, total_movements


class PlanStats(NamedTuple):
    """Balance of the target brokers once a plan is applied."""
    replica_counts: dict[int, int]
    sizes: dict[int, float]
    net_imbalance: int
    replica_count_cv: float
    size_cv: float
    movement_count: int


def get_plan_stats(
    targets: list[BrokerUsage],
    prev_assignment: dict[tuple[str, int], list[int]],
    curr_assignment: dict[tuple[str, int], list[int]],
) -> PlanStats:
    """Summarize the planned load of the target brokers."""
    replica_counts = {usage.id: usage.total_replicas for usage in targets}
    sizes = {usage.id: usage.total_size for usage in targets}
    _, movement_count = calculate_replica_movement(prev_assignment, curr_assignment)
    return PlanStats(
        replica_counts=replica_counts,
        sizes=sizes,
        net_imbalance=get_net_imbalance(list(replica_counts.values())) if targets else 0,
        replica_count_cv=coefficient_of_variation(list(replica_counts.values())) if targets else 0,
        size_cv=coefficient_of_variation(list(sizes.values())) if targets else 0,
        movement_count=movement_count,
    )
