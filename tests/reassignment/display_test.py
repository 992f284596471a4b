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
from kafka_planner.reassignment.broker import Broker
from kafka_planner.reassignment.display import display_broker_usage
from kafka_planner.reassignment.display import display_table
from kafka_planner.reassignment.usage import BrokerUsage


def test_display_table(capsys):
    display_table(['Broker', 'Replicas'], [[1, 10], [22, 3]])

    out, _ = capsys.readouterr()
    assert out.splitlines() == [
        'Broker | Replicas',
        '-------+---------',
        '1      | 10      ',
        '22     | 3       ',
    ]


def test_display_broker_usage(capsys):
    display_broker_usage([
        BrokerUsage(Broker(1, rack='r1', log_dir_size=2048), actual_replicas=4, actual_size=1024),
        BrokerUsage(Broker(2), actual_replicas=1, actual_size=0),
    ])

    out, _ = capsys.readouterr()
    lines = out.splitlines()
    assert lines[0].split(' | ')[0] == 'Broker'
    assert '1 KiB' in lines[2]
    assert '2 KiB' in lines[2]
    assert lines[3].split(' | ')[1].strip() == '-'
