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
import textwrap

SNAPSHOT = textwrap.dedent("""
    ---
    brokers:
      - {id: 1, address: "kafka-1:9092", rack: "r1", log_dir_size: 10240}
      - {id: 2, address: "kafka-2:9092", rack: "r1", log_dir_size: 0}
      - {id: 3, address: "kafka-3:9092", rack: "r2", log_dir_size: 2048}
    topics:
      orders:
        replication_factor: 2
        partitions:
          - id: 0
            replicas: [1]
            log_dirs:
              - {broker_id: 1, size: 10240}
      payments:
        replication_factor: 1
        partitions:
          - id: 0
            replicas: [3]
            log_dirs:
              - {broker_id: 3, size: 1024}
          - id: 1
            replicas: [3]
            log_dirs:
              - {broker_id: 3, size: 1024}
""")
