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

from kafka_planner.util.error import KafkaToolError


class ReassignmentError(KafkaToolError):
    """Base class for errors that abort a reassignment computation."""
    pass


class ValidationError(ReassignmentError):
    """Raised when the placement is asked to do something impossible,
    like placing replicas without any target broker.
    """
    pass


class InvalidReplicationFactorError(ValidationError):
    """Raised when a replication factor of zero or less reaches the placer."""
    pass


class BrokerReferenceError(ReassignmentError):
    """Raised when a partition references a broker id which is not part of
    the known broker list.
    """

    def __init__(self, message: str, broker_id: int, partition: tuple[str, int]) -> None:
        super().__init__(message)
        self.broker_id = broker_id
        self.partition = partition


class MissingDataError(ReassignmentError):
    """Raised when the log-dir size report needed for a broker/partition pair
    is absent.
    """

    def __init__(self, message: str, broker_id: int | None, partition: tuple[str, int]) -> None:
        super().__init__(message)
        self.broker_id = broker_id
        self.partition = partition


class DataUnavailableError(ReassignmentError):
    """Raised when the cluster snapshot, or the partition list of one of its
    topics, can't be read. Usually a permission problem upstream.
    """

    def __init__(self, message: str, broker_id: int, topic: str | None = None) -> None:
        super().__init__(message)
        self.broker_id = broker_id
        self.topic = topic
