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

from typing import NamedTuple


class Broker(NamedTuple):
    """Broker as reported by the cluster.

    :param id: broker id
    :param address: host:port the broker listens on
    :param rack: rack label, None when the cluster doesn't define racks
    :param log_dir_size: total disk usage reported by the broker
    """
    id: int
    address: str = ''
    rack: str | None = None
    log_dir_size: float = 0

    def __str__(self) -> str:
        return f"{self.id}"
