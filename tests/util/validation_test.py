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
import pytest

from kafka_planner.util.validation import _validate_format
from kafka_planner.util.validation import assignment_to_plan
from kafka_planner.util.validation import plan_to_assignment
from kafka_planner.util.validation import validate_plan


@pytest.fixture
def plan():
    return {
        "version": 1,
        "partitions": [
            {"partition": 0, "topic": 'orders', "replicas": [0, 1]},
            {"partition": 1, "topic": 'orders', "replicas": [1, 2]},
            {"partition": 0, "topic": 'payments', "replicas": [2]},
        ],
    }


def test_assignment_to_plan(plan):
    assignment = {
        ('orders', 0): [0, 1],
        ('orders', 1): [1, 2],
        ('payments', 0): [2],
    }

    assert assignment_to_plan(assignment) == plan


def test_plan_to_assignment(plan):
    assert plan_to_assignment(plan) == {
        ('orders', 0): [0, 1],
        ('orders', 1): [1, 2],
        ('payments', 0): [2],
    }


def test_validate_format(plan):
    assert _validate_format(plan) is True


@pytest.mark.parametrize(
    'invalid_plan',
    [
        # 'version' key missing
        {"partitions": [{"partition": 0, "topic": 't1', "replicas": [0]}]},
        # unknown key
        {
            "cluster": "c1",
            "version": 1,
            "partitions": [{"partition": 0, "topic": 't1', "replicas": [0]}],
        },
        # wrong version
        {"version": 2, "partitions": [{"partition": 0, "topic": 't1', "replicas": [0]}]},
        {},
        {"version": 1, "partitions": []},
        {"version": 1, "partitions": {"partition": 0, "topic": 't1', "replicas": [0]}},
        # 'partition' key missing
        {"version": 1, "partitions": [{"topic": 't1', "replicas": [0]}]},
        # unknown partition key
        {
            "version": 1,
            "partitions": [{"isr": [0], "partition": 0, "topic": 't1', "replicas": [0]}],
        },
        {"version": 1, "partitions": [{"partition": '0', "topic": 't1', "replicas": [0]}]},
        {"version": 1, "partitions": [{"partition": 0, "topic": 1, "replicas": [0]}]},
        {"version": 1, "partitions": [{"partition": 0, "topic": 't1', "replicas": '0'}]},
        {"version": 1, "partitions": [{"partition": 0, "topic": 't1', "replicas": ['0']}]},
        {"version": 1, "partitions": [{"partition": 0, "topic": 't1', "replicas": []}]},
    ],
)
def test_validate_format_invalid(invalid_plan):
    assert _validate_format(invalid_plan) is False


def test_validate_plan(plan):
    assert validate_plan(plan) is True


def test_validate_plan_invalid_format():
    assert validate_plan({"version": 1, "partitions": []}) is False


def test_validate_plan_duplicate_partitions(plan):
    plan['partitions'].append(
        {"partition": 0, "topic": 'orders', "replicas": [2, 3]},
    )

    assert validate_plan(plan) is False


def test_validate_plan_duplicate_replica_brokers(plan):
    plan['partitions'][0]['replicas'] = [1, 1]

    assert validate_plan(plan) is False
    assert validate_plan(plan, allow_duplicate_replicas=True) is True


def test_validate_plan_different_replication_factor(plan):
    plan['partitions'][1]['replicas'] = [1, 2, 3]

    assert validate_plan(plan) is False
