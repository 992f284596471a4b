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

from .helper import broker_range
from .helper import create_snapshot


@pytest.fixture
def default_assignment():
    return {
        ('T0', 0): [1, 2],
        ('T0', 1): [2, 3],
        ('T1', 0): [0, 1, 2, 3],
        ('T1', 1): [0, 1, 2, 3],
        ('T2', 0): [2],
        ('T3', 0): [0, 1, 2],
        ('T3', 1): [0, 1, 4],
    }


@pytest.fixture
def default_broker_rack():
    return {
        0: 'rg1',
        1: 'rg1',
        2: 'rg2',
        3: 'rg2',
        4: 'rg1',
    }


@pytest.fixture
def default_brokers(default_broker_rack):
    return broker_range(5, default_broker_rack)


@pytest.fixture
def default_partition_size():
    return {
        ('T0', 0): 3,
        ('T0', 1): 4,
        ('T1', 0): 5,
        ('T1', 1): 6,
        ('T2', 0): 7,
        ('T3', 0): 8,
        ('T3', 1): 9,
    }


@pytest.fixture
def default_snapshot(default_assignment, default_partition_size):
    return create_snapshot(default_assignment, default_partition_size)
