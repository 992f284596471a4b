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
import argparse
import json
from unittest import mock

from pytest import fixture
from pytest import raises

from kafka_planner.cmds.plan import PlanCmd
from kafka_planner.reassignment.coordinator import ReassignmentCoordinator
from kafka_planner.reassignment.placer import DiskComparison
from kafka_planner.reassignment.usage import ResetPolicy
from kafka_planner.util.config import PlannerConfig


@fixture
def args(snapshot_path):
    return argparse.Namespace(
        snapshot=snapshot_path,
        topics=[('orders', None)],
        target_brokers=[1, 2, 3],
        reset_policy=None,
        disk_comparison=None,
        proposed_plan_file=None,
    )


def read_plan(capsys):
    out, _ = capsys.readouterr()
    return json.loads(out)


class TestPlanCmd:

    def test_run_prefers_holder_then_rack(self, args, capsys):
        PlanCmd().run(PlannerConfig(), args)

        assert read_plan(capsys) == {
            'version': 1,
            'partitions': [
                {'topic': 'orders', 'partition': 0, 'replicas': [1, 2]},
            ],
        }

    def test_run_partition_subset(self, args, capsys):
        args.topics = [('payments', [1])]
        args.target_brokers = [1, 2]

        PlanCmd().run(PlannerConfig(), args)

        assert read_plan(capsys) == {
            'version': 1,
            'partitions': [
                {'topic': 'payments', 'partition': 1, 'replicas': [2]},
            ],
        }

    def test_run_write_to_file(self, args, capsys, tmp_path):
        plan_file = tmp_path / 'plan.json'
        args.proposed_plan_file = str(plan_file)

        PlanCmd().run(PlannerConfig(), args)

        with open(str(plan_file)) as f:
            assert json.load(f) == read_plan(capsys)

    def test_run_overrides_config(self, args, capsys):
        args.reset_policy = 'keep'
        args.disk_comparison = 'legacy'

        with mock.patch(
            'kafka_planner.cmds.plan.ReassignmentCoordinator',
            wraps=ReassignmentCoordinator,
        ) as mock_coordinator:
            PlanCmd().run(PlannerConfig(), args)

        assert mock_coordinator.call_args == mock.call(
            ResetPolicy.KEEP,
            DiskComparison.LEGACY,
        )

    def test_run_uses_config(self, args, capsys):
        config = PlannerConfig(ResetPolicy.KEEP, DiskComparison.LEGACY)

        with mock.patch(
            'kafka_planner.cmds.plan.ReassignmentCoordinator',
            wraps=ReassignmentCoordinator,
        ) as mock_coordinator:
            PlanCmd().run(config, args)

        assert mock_coordinator.call_args == mock.call(
            ResetPolicy.KEEP,
            DiskComparison.LEGACY,
        )

    def test_run_unknown_topic(self, args):
        args.topics = [('unknown', None)]

        with raises(SystemExit) as e:
            PlanCmd().run(PlannerConfig(), args)
        assert e.value.code == 1

    def test_run_unknown_partition(self, args):
        args.topics = [('payments', [0, 7])]

        with raises(SystemExit) as e:
            PlanCmd().run(PlannerConfig(), args)
        assert e.value.code == 1

    def test_run_topic_given_twice(self, args, capsys):
        args.topics = [('payments', None), ('payments', [1])]

        with raises(SystemExit) as e:
            PlanCmd().run(PlannerConfig(), args)
        assert e.value.code == 1
        out, _ = capsys.readouterr()
        assert out == ''

    def test_run_no_target_brokers(self, args):
        args.target_brokers = [42]

        with raises(SystemExit) as e:
            PlanCmd().run(PlannerConfig(), args)
        assert e.value.code == 1

    def test_run_topics_unavailable(self, args, tmp_path):
        path = tmp_path / 'restricted.yaml'
        path.write_text('brokers: [{id: 1}]\ntopics: null\n')
        args.snapshot = str(path)

        with raises(SystemExit) as e:
            PlanCmd().run(PlannerConfig(), args)
        assert e.value.code == 1

    def test_run_missing_snapshot(self, args, tmp_path):
        args.snapshot = str(tmp_path / 'missing.yaml')

        with raises(SystemExit) as e:
            PlanCmd().run(PlannerConfig(), args)
        assert e.value.code == 1

    def test_run_no_brokers(self, args, tmp_path, capsys):
        path = tmp_path / 'empty.yaml'
        path.write_text('brokers: []\ntopics: {}\n')
        args.snapshot = str(path)

        PlanCmd().run(PlannerConfig(), args)

        out, _ = capsys.readouterr()
        assert out == ''
