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

import json
import sys
from argparse import ArgumentTypeError
from typing import Any


def broker_id_list(string: str) -> list[int]:
    """Convert a comma separated string to a list of broker ids."""
    error_msg = f'Comma separated list of broker ids required, {string} given.'
    try:
        broker_ids = [int(b_id) for b_id in string.split(',') if b_id.strip()]
    except ValueError:
        raise ArgumentTypeError(error_msg)
    if not broker_ids or any(b_id < 0 for b_id in broker_ids):
        raise ArgumentTypeError(error_msg)
    return broker_ids


def topic_partitions(string: str) -> tuple[str, list[int] | None]:
    """Convert 'topic' or 'topic:0,1,2' to a (topic, partition ids) tuple.
    Partition ids are None when the whole topic is selected.
    """
    error_msg = f'<topic> or <topic>:<partition>,... required, {string} given.'
    topic, sep, partitions = string.rpartition(':')
    if not sep:
        return string, None
    if not topic:
        raise ArgumentTypeError(error_msg)
    try:
        partition_ids = [int(p_id) for p_id in partitions.split(',') if p_id.strip()]
    except ValueError:
        raise ArgumentTypeError(error_msg)
    if not partition_ids or any(p_id < 0 for p_id in partition_ids):
        raise ArgumentTypeError(error_msg)
    if len(set(partition_ids)) != len(partition_ids):
        raise ArgumentTypeError(
            f'Partition ids of {topic} should be unique, {string} given.',
        )
    return topic, partition_ids


def format_to_json(data: Any) -> str:
    """Converts `data` into json
    If stdout is a tty it performs a pretty print.
    """
    if sys.stdout.isatty():
        return json.dumps(data, indent=4, separators=(',', ': '))
    else:
        return json.dumps(data)


def print_json(data: Any) -> None:
    """Converts `data` into json and prints it to stdout."""
    print(format_to_json(data))
